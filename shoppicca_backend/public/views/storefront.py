# public/views/storefront.py
"""
PUBLIC STOREFRONT

GET /store/<slug>                      (tenant rewrite target)
GET /api/store/<slug>/
GET /api/store/<slug>/search/?q=&category=
GET /api/product/<uuid>/

Rules:
- AllowAny (public)
- Only is_visible products are ever exposed
- Throttled to reduce scraping/abuse
"""

from __future__ import annotations

import uuid

from django.db.models import Prefetch
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from products.models import Category, Product, ProductImage
from public.serializers import (
    PublicCategorySerializer,
    PublicProductDetailSerializer,
    PublicProductSerializer,
    StorefrontSerializer,
)
from public.services.whatsapp import product_whatsapp_url
from public.throttles import PublicCatalogThrottle
from store.models import Store
from store.serializers import StoreSerializer


def _store_not_found():
    return Response({"error": "Store not found"}, status=status.HTTP_404_NOT_FOUND)


def visible_products(store):
    return (
        Product.objects.filter(store=store, is_visible=True)
        .select_related("category")
        .prefetch_related(
            Prefetch("images", queryset=ProductImage.objects.order_by("position")),
            "attributes",
        )
        .order_by("-created_at")
    )


class StorefrontView(APIView):
    """
    Store + plan, categories (oldest first) and visible products (newest first).
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(
        tags=["Public"],
        responses={
            200: StorefrontSerializer,
            404: OpenApiResponse(description="Store not found"),
            429: OpenApiResponse(description="Rate limited"),
        },
    )
    def get(self, request, slug, *args, **kwargs):
        store = Store.objects.select_related("plan").filter(slug=(slug or "").lower()).first()
        if store is None:
            return _store_not_found()

        categories = Category.objects.filter(store=store).order_by("created_at")

        payload = {
            "store": StoreSerializer(store).data,
            "categories": PublicCategorySerializer(categories, many=True).data,
            "products": PublicProductSerializer(visible_products(store), many=True).data,
        }
        return Response(payload, status=status.HTTP_200_OK)


class StorefrontSearchView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(
        tags=["Public"],
        parameters=[
            OpenApiParameter(name="q", type=str, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(
                name="category",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Category UUID",
            ),
        ],
        responses={
            200: PublicProductSerializer(many=True),
            404: OpenApiResponse(description="Store not found"),
        },
    )
    def get(self, request, slug, *args, **kwargs):
        store = Store.objects.filter(slug=(slug or "").lower()).first()
        if store is None:
            return _store_not_found()

        q = (request.query_params.get("q") or "").strip()
        category = (request.query_params.get("category") or "").strip()

        products = visible_products(store)
        if q:
            products = products.filter(name__icontains=q)
        if category:
            try:
                products = products.filter(category_id=uuid.UUID(category))
            except ValueError:
                products = products.none()

        return Response(
            {"products": PublicProductSerializer(products, many=True).data},
            status=status.HTTP_200_OK,
        )


class PublicProductDetailView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(
        tags=["Public"],
        responses={
            200: PublicProductDetailSerializer,
            404: OpenApiResponse(description="Product not found"),
        },
    )
    def get(self, request, product_id, *args, **kwargs):
        product = (
            Product.objects.filter(id=product_id, is_visible=True)
            .select_related("category", "store")
            .prefetch_related("images", "attributes")
            .first()
        )
        if product is None:
            return Response({"error": "Product not found"}, status=status.HTTP_404_NOT_FOUND)

        store = product.store
        whatsapp_url = None
        if store.whatsapp_number:
            whatsapp_url = product_whatsapp_url(
                store.whatsapp_number, product.name, product.price, product.price_type
            )

        return Response(
            {
                "product": PublicProductDetailSerializer(product).data,
                "store": {"name": store.name, "slug": store.slug},
                "whatsapp_url": whatsapp_url,
            },
            status=status.HTTP_200_OK,
        )
