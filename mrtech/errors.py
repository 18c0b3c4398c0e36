"""
API Errors

Exceptions raised by services and rendered by the API blueprint as
``{"ok": false, "error": message}`` with the matching status code.
"""


class ApiError(Exception):
    """Base error carrying an HTTP status and a client-safe message."""
    status_code = 500
    default_message = 'Internal error'

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self):
        return {'ok': False, 'error': self.message}


class ValidationError(ApiError):
    status_code = 400
    default_message = 'Invalid request'


class NotFoundError(ApiError):
    status_code = 404
    default_message = 'Not found'


class UploadTooLarge(ApiError):
    status_code = 413
    default_message = 'File too large (max 6MB)'


class UnsupportedMediaType(ApiError):
    status_code = 415
    default_message = 'Unsupported file type. Use JPG, PNG, or WEBP.'
