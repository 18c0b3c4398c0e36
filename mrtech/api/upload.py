"""
Image Upload API
"""

from flask import current_app, request, jsonify

from mrtech.api import api_bp
from mrtech.admin.decorators import admin_required
from mrtech.services.uploads import save_image


@api_bp.route('/upload', methods=['POST'])
@admin_required
def upload_image():
    """Store a product photo sent as multipart field ``file``."""
    url = save_image(request.files.get('file'),
                     current_app.config['UPLOAD_FOLDER'],
                     max_bytes=current_app.config['MAX_UPLOAD_BYTES'])
    return jsonify({'ok': True, 'url': url})
