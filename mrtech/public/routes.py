"""
Public Routes
"""

from flask import current_app, render_template, send_from_directory
from mrtech.public import public_bp
from mrtech.models import Product

SERVICES = [
    ('Repairs', 'Laptop and desktop repairs, screen and keyboard replacements.'),
    ('Upgrades', 'SSD and RAM upgrades to bring older machines back to speed.'),
    ('Software', 'Windows installs, virus removal and data backup.'),
    ('Refurbished PCs', 'Tested refurbished laptops and desktops with warranty.'),
]


@public_bp.route('/')
def index():
    """Marketing home page with a few featured items."""
    featured = Product.query.filter_by(featured=True, status='IN_STOCK')\
        .order_by(Product.updated_at.desc()).limit(3).all()
    return render_template('public/home.html', services=SERVICES, featured=featured)


@public_bp.route('/stock')
def stock():
    """Stock listing split into refurbished machines and accessories."""
    products = Product.query.order_by(Product.updated_at.desc()).all()
    refurb = [p for p in products if p.category == 'REFURB']
    accessories = [p for p in products if p.category == 'ACCESSORY']
    return render_template('public/stock.html', refurb=refurb, accessories=accessories)


@public_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    """Serve a stored product image."""
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
