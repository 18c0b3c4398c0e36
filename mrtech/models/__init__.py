"""
Models Package

Exports all models for easy importing.
"""

from mrtech.models.product import Product, CATEGORIES, CONDITIONS, STORAGE_TYPES, STATUSES

__all__ = ['Product', 'CATEGORIES', 'CONDITIONS', 'STORAGE_TYPES', 'STATUSES']
