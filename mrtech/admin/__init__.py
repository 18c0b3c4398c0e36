"""
Admin Blueprint

Owner panel for managing stock. Access is gated by the signed admin
cookie; there are no user accounts.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from mrtech.admin import routes  # noqa: E402, F401
