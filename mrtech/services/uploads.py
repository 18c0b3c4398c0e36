"""
Image Upload Service

Stores product photos on local disk and hands back their public URL.
"""

import logging
import os
import secrets
import time

from mrtech.errors import UploadTooLarge, UnsupportedMediaType, ValidationError

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 6 * 1024 * 1024
ALLOWED_IMAGE_TYPES = {
    'image/jpeg': 'jpg',
    'image/png': 'png',
    'image/webp': 'webp',
}
UPLOAD_URL_PREFIX = '/uploads/'


def make_upload_filename(ext):
    """``<epoch-ms>-<32 hex>.<ext>``, unique enough to never collide."""
    return f'{int(time.time() * 1000)}-{secrets.token_hex(16)}.{ext}'


def save_image(file, upload_dir, max_bytes=MAX_UPLOAD_BYTES):
    """Validate and write an uploaded image.
    
    Args:
        file: werkzeug ``FileStorage`` from ``request.files``
        upload_dir: directory the file is written into (created if missing)
        max_bytes: size ceiling in bytes
    
    Returns:
        Public URL of the stored file, e.g. ``/uploads/1700000000000-ab12....png``
    """
    if file is None or not file.filename:
        raise ValidationError('Missing file')
    
    # Read one byte past the limit so oversize files are caught without
    # pulling an arbitrarily large body into memory
    data = file.stream.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise UploadTooLarge(f'File too large (max {max_bytes // (1024 * 1024)}MB)')
    
    ext = ALLOWED_IMAGE_TYPES.get(file.mimetype)
    if not ext:
        raise UnsupportedMediaType()
    
    filename = make_upload_filename(ext)
    os.makedirs(upload_dir, exist_ok=True)
    with open(os.path.join(upload_dir, filename), 'wb') as fh:
        fh.write(data)
    
    logger.info("Stored upload %s (%d bytes, %s)", filename, len(data), file.mimetype)
    return UPLOAD_URL_PREFIX + filename
