"""
Services Package

Exports all services for easy importing.
"""

from mrtech.services.auth import AuthConfig, AdminAuthenticator, SESSION_MAX_AGE_SECONDS
from mrtech.services.products import build_create_fields, build_update_fields, apply_changes
from mrtech.services.uploads import save_image

__all__ = [
    'AuthConfig',
    'AdminAuthenticator',
    'SESSION_MAX_AGE_SECONDS',
    'build_create_fields',
    'build_update_fields',
    'apply_changes',
    'save_image',
]
