"""
Admin Decorator

Every privileged endpoint goes through here before touching storage.
"""

from functools import wraps
from flask import jsonify
from flask_login import current_user


def admin_required(f):
    """Decorator to ensure the request carries a valid admin cookie.
    
    - current_user is resolved by the admin cookie request loader
    - Anything else (missing, expired, forged) gets a bare 401
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'ok': False, 'error': 'Unauthorized'}), 401
        return f(*args, **kwargs)
    return wrapper
