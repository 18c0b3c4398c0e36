"""
Product Management API

CRUD over the stock list. All routes require the admin cookie.
"""

import logging

from flask import request, jsonify

from mrtech.api import api_bp
from mrtech.admin.decorators import admin_required
from mrtech.errors import NotFoundError
from mrtech.extensions import db
from mrtech.models import Product
from mrtech.services.products import build_create_fields, build_update_fields, apply_changes

logger = logging.getLogger(__name__)


def _storage_error(e, fallback):
    db.session.rollback()
    logger.exception("%s", fallback)
    message = str(e) or fallback
    return jsonify({'ok': False, 'error': message}), 500


def _get_product_or_404(product_id):
    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFoundError('Product not found')
    return product


@api_bp.route('/products', methods=['GET'])
@admin_required
def list_products():
    """All products, most recently updated first."""
    try:
        products = Product.query.order_by(Product.updated_at.desc()).all()
    except Exception as e:
        return _storage_error(e, 'Failed to load products')
    return jsonify({'ok': True, 'products': [p.to_dict() for p in products]})


@api_bp.route('/products', methods=['POST'])
@admin_required
def create_product():
    """Create a product from a JSON body."""
    fields = build_create_fields(request.get_json(silent=True))
    
    product = Product(**fields)
    try:
        db.session.add(product)
        db.session.commit()
    except Exception as e:
        return _storage_error(e, 'Failed to create product')
    
    logger.info("Created product %s (%s)", product.id, product.name)
    return jsonify({'ok': True, 'product': product.to_dict()})


@api_bp.route('/products/<product_id>', methods=['PUT'])
@admin_required
def update_product(product_id):
    """Apply a partial update; only keys present in the body change."""
    changes = build_update_fields(request.get_json(silent=True))
    
    try:
        product = _get_product_or_404(product_id)
        apply_changes(product, changes)
        db.session.commit()
    except NotFoundError:
        raise
    except Exception as e:
        return _storage_error(e, 'Failed to update product')
    
    logger.info("Updated product %s: %s", product.id, ', '.join(sorted(changes)) or 'no changes')
    return jsonify({'ok': True, 'product': product.to_dict()})


@api_bp.route('/products/<product_id>', methods=['DELETE'])
@admin_required
def delete_product(product_id):
    """Delete a product."""
    try:
        product = _get_product_or_404(product_id)
        db.session.delete(product)
        db.session.commit()
    except NotFoundError:
        raise
    except Exception as e:
        return _storage_error(e, 'Failed to delete product')
    
    logger.info("Deleted product %s", product_id)
    return jsonify({'ok': True})
