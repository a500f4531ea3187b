"""
PATH: products/models/__init__.py

Catalog models export surface.
"""

from .category import Category
from .product import Product, ProductAttribute, ProductImage

__all__ = [
    "Category",
    "Product",
    "ProductAttribute",
    "ProductImage",
]
