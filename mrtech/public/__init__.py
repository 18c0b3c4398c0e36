"""
Public Blueprint

Marketing home page, the stock listing and uploaded product images.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__)

from mrtech.public import routes  # noqa: E402, F401
