from .category import CategoryViewSet
from .product import ProductViewSet
from .upload import ImageUploadView

__all__ = ["CategoryViewSet", "ImageUploadView", "ProductViewSet"]
