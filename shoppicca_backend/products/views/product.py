# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Owner product management endpoints (CRUD)
- Scoped to the caller's store; filter by category / is_visible, search by name

Key rule alignment:
- plan.products_per_category caps how many products one category holds
  (checked on create and when a product moves to another category).
"""

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated

from products.models import Product
from products.serializers.product import ProductSerializer
from store.permissions import HasStore, get_owned_store

logger = logging.getLogger(__name__)


@extend_schema_view(
    create=extend_schema(
        responses={
            201: ProductSerializer,
            403: OpenApiResponse(description="Plan product limit reached"),
        }
    )
)
class ProductViewSet(viewsets.ModelViewSet):
    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated, HasStore]
    filterset_fields = ["category", "is_visible", "price_type"]
    search_fields = ["name"]
    ordering_fields = ["created_at", "name", "price"]

    def get_store(self):
        if not hasattr(self, "_store"):
            self._store = get_owned_store(self.request.user)
        return self._store

    def get_queryset(self):
        return (
            Product.objects.filter(store=self.get_store())
            .select_related("category")
            .prefetch_related("images", "attributes")
            .order_by("-created_at")
        )

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["store"] = self.get_store()
        return context

    def _enforce_category_limit(self, category, exclude_id=None):
        if category is None:
            return

        store = self.get_store()
        limit = store.plan.products_per_category if store.plan else None
        if limit is None:
            return

        qs = Product.objects.filter(store=store, category=category)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)

        if qs.count() >= limit:
            raise PermissionDenied(
                f"Your plan allows only {limit} products per category"
            )

    def perform_create(self, serializer):
        self._enforce_category_limit(serializer.validated_data.get("category"))
        product = serializer.save(store=self.get_store())
        logger.info(
            "Product created",
            extra={"store_id": str(product.store_id), "product_id": str(product.id)},
        )

    def perform_update(self, serializer):
        instance = serializer.instance
        if "category" in serializer.validated_data:
            category = serializer.validated_data["category"]
            if category is not None and category.id != instance.category_id:
                self._enforce_category_limit(category, exclude_id=instance.id)
        serializer.save()
