"""
Product Model
"""

import uuid
from datetime import datetime

from mrtech.extensions import db

CATEGORIES = ('REFURB', 'ACCESSORY')
CONDITIONS = ('NEW', 'GOOD', 'FAIR')
STORAGE_TYPES = ('SSD', 'HDD')
STATUSES = ('IN_STOCK', 'OUT_OF_STOCK')


def _new_id():
    return uuid.uuid4().hex


class Product(db.Model):
    """A refurbished machine or accessory listed on the stock page"""
    __tablename__ = 'products'
    
    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    category = db.Column(db.Enum(*CATEGORIES, name='product_category'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    brand = db.Column(db.String(100))
    model = db.Column(db.String(100))
    condition = db.Column(db.Enum(*CONDITIONS, name='product_condition'))
    warranty_days = db.Column(db.Integer)
    featured = db.Column(db.Boolean, default=False, nullable=False)
    
    # Refurbished machine specs
    cpu = db.Column(db.String(100))
    ram_gb = db.Column(db.Integer)
    storage_gb = db.Column(db.Integer)
    storage_type = db.Column(db.Enum(*STORAGE_TYPES, name='product_storage_type'))
    screen_inches = db.Column(db.Float)
    os = db.Column(db.String(100))
    
    # Accessory details
    accessory_type = db.Column(db.String(100))
    compatibility = db.Column(db.String(255))
    
    quantity = db.Column(db.Integer, default=1, nullable=False)
    notes = db.Column(db.Text)
    image_url = db.Column(db.String(500))
    price_cents = db.Column(db.Integer, default=0, nullable=False)
    status = db.Column(db.Enum(*STATUSES, name='product_status'), default='IN_STOCK', nullable=False)
    
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, index=True)
    
    @property
    def in_stock(self):
        return self.status != 'OUT_OF_STOCK'
    
    def to_dict(self):
        """JSON shape used by the admin API."""
        return {
            'id': self.id,
            'category': self.category,
            'name': self.name,
            'brand': self.brand,
            'model': self.model,
            'condition': self.condition,
            'warrantyDays': self.warranty_days,
            'featured': bool(self.featured),
            'cpu': self.cpu,
            'ramGb': self.ram_gb,
            'storageGb': self.storage_gb,
            'storageType': self.storage_type,
            'screenInches': self.screen_inches,
            'os': self.os,
            'accessoryType': self.accessory_type,
            'compatibility': self.compatibility,
            'quantity': self.quantity,
            'notes': self.notes,
            'imageUrl': self.image_url,
            'priceCents': self.price_cents,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
    
    def __repr__(self):
        return f'<Product {self.name} ({self.category})>'
