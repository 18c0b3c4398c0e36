"""
Admin Session

Glue between the stateless token authenticator and Flask: reading the
cookie, setting and clearing it, and exposing the admin as a Flask-Login
identity.
"""

from flask import current_app
from flask_login import UserMixin

from mrtech.services.auth import SESSION_MAX_AGE_SECONDS

EXTENSION_KEY = 'admin_auth'


class AdminIdentity(UserMixin):
    """The one and only admin. Exists only for requests with a valid cookie."""
    id = 'admin'
    
    def __repr__(self):
        return '<AdminIdentity>'


def get_authenticator():
    """The AdminAuthenticator built by create_app."""
    return current_app.extensions[EXTENSION_KEY]


def cookie_name():
    return current_app.config['ADMIN_COOKIE_NAME']


def load_admin_from_request(request):
    """Flask-Login request loader: verify the admin cookie, nothing else."""
    token = request.cookies.get(cookie_name())
    if get_authenticator().verify_token(token):
        return AdminIdentity()
    return None


def set_admin_cookie(response, token):
    response.set_cookie(
        cookie_name(),
        token,
        max_age=SESSION_MAX_AGE_SECONDS,
        path='/',
        httponly=True,
        samesite='Lax',
        secure=current_app.config.get('APP_ENV') == 'production',
    )
    return response


def clear_admin_cookie(response):
    response.delete_cookie(
        cookie_name(),
        path='/',
        httponly=True,
        samesite='Lax',
        secure=current_app.config.get('APP_ENV') == 'production',
    )
    return response
