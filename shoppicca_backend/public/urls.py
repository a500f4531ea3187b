# public/urls.py
"""
PUBLIC API URLS (STOREFRONT)

Mounted under /api/ in backend/urls.py:
- GET  /api/store/<slug>/
- GET  /api/store/<slug>/search/
- GET  /api/product/<uuid>/
- POST /api/wishlist/send/
- POST /api/send-sms/

The tenant rewrite target /store/<slug> is routed in backend/urls.py.
"""

from __future__ import annotations

from django.urls import path

from public.views import (
    ContactSmsView,
    PublicProductDetailView,
    StorefrontSearchView,
    StorefrontView,
    WishlistSendView,
)

app_name = "public"

urlpatterns = [
    path("store/<str:slug>/", StorefrontView.as_view(), name="storefront"),
    path("store/<str:slug>/search/", StorefrontSearchView.as_view(), name="storefront-search"),
    path("product/<uuid:product_id>/", PublicProductDetailView.as_view(), name="product-detail"),
    path("wishlist/send/", WishlistSendView.as_view(), name="wishlist-send"),
    path("send-sms/", ContactSmsView.as_view(), name="send-sms"),
]
