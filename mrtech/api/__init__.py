"""
Admin API Blueprint

JSON endpoints behind the owner panel. Every response is shaped
``{"ok": bool, ...}``; failures carry an ``error`` message.
"""

import logging

from flask import Blueprint, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

from mrtech.errors import ApiError

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)


@api_bp.errorhandler(ApiError)
def handle_api_error(error):
    return jsonify(error.to_dict()), error.status_code


@api_bp.errorhandler(RequestEntityTooLarge)
def handle_request_too_large(error):
    return jsonify({'ok': False, 'error': 'File too large (max 6MB)'}), 413


from mrtech.api import auth, products, upload  # noqa: E402, F401
