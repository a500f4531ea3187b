# products/urls.py

"""
PRODUCTS URLS

Mounted under /api/admin/ in backend/urls.py:
    /api/admin/categories/
    /api/admin/products/
    /api/admin/uploads/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import CategoryViewSet, ImageUploadView, ProductViewSet

router = DefaultRouter()

router.register(r"categories", CategoryViewSet, basename="categories")
router.register(r"products", ProductViewSet, basename="products")

urlpatterns = [
    path("uploads/", ImageUploadView.as_view(), name="uploads"),
    path("", include(router.urls)),
]
