"""
Admin Routes

The owner panel page. The page itself is public; it shows the login form
until the admin cookie verifies, then the product manager.
"""

from flask import render_template
from flask_login import current_user
from mrtech.admin import admin_bp
from mrtech.models import Product, CATEGORIES, CONDITIONS, STORAGE_TYPES, STATUSES


@admin_bp.route('/admin')
def admin_panel():
    """Admin panel: login form or product manager."""
    if not current_user.is_authenticated:
        return render_template('admin/login.html')
    
    products = Product.query.order_by(Product.updated_at.desc()).all()
    return render_template('admin/products.html',
                         products=products,
                         categories=CATEGORIES,
                         conditions=CONDITIONS,
                         storage_types=STORAGE_TYPES,
                         statuses=STATUSES)
