"""
Admin Login / Logout

Login swaps the admin password for a signed cookie. Logout just drops
the cookie; there is no server-side session to end.
"""

import logging

from flask import request, jsonify

from mrtech.api import api_bp
from mrtech.admin.session import get_authenticator, set_admin_cookie, clear_admin_cookie

logger = logging.getLogger(__name__)


def _submitted_password():
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        password = body.get('password')
    else:
        password = request.form.get('password')
    return password if isinstance(password, str) else None


@api_bp.route('/login', methods=['POST'])
def login():
    """Exchange the admin password for a session cookie.
    
    - 400 when no password was sent
    - 401 for a wrong password (no further detail)
    - 500 when ADMIN_PASSWORD or AUTH_SECRET is not configured
    """
    password = _submitted_password()
    if not password:
        return jsonify({'ok': False, 'error': 'Missing password'}), 400
    
    auth = get_authenticator()
    if not auth.config.is_configured:
        logger.error("Admin login attempted but ADMIN_PASSWORD or AUTH_SECRET is not configured")
        return jsonify({'ok': False, 'error': 'Server not configured'}), 500
    
    if not auth.verify_password(password):
        logger.warning("Rejected admin login from %s", request.remote_addr)
        return jsonify({'ok': False, 'error': 'Invalid password'}), 401
    
    token = auth.issue_token()
    if not token:
        logger.error("Admin login attempted but AUTH_SECRET is not configured")
        return jsonify({'ok': False, 'error': 'Server not configured'}), 500
    
    logger.info("Admin logged in from %s", request.remote_addr)
    return set_admin_cookie(jsonify({'ok': True}), token)


@api_bp.route('/logout', methods=['POST'])
def logout():
    """Clear the admin cookie."""
    return clear_admin_cookie(jsonify({'ok': True}))
