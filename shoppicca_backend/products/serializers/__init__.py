from .category import CategorySerializer
from .product import (
    ProductAttributeSerializer,
    ProductImageSerializer,
    ProductSerializer,
)

__all__ = [
    "CategorySerializer",
    "ProductAttributeSerializer",
    "ProductImageSerializer",
    "ProductSerializer",
]
