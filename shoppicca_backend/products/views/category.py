# products/views/category.py

from django.db.models import Count
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated

from products.models import Category
from products.serializers.category import CategorySerializer
from store.permissions import HasStore, get_owned_store


@extend_schema_view(
    create=extend_schema(
        responses={
            201: CategorySerializer,
            403: OpenApiResponse(description="Plan category limit reached"),
        }
    )
)
class CategoryViewSet(viewsets.ModelViewSet):
    """
    Category API (owner dashboard)

    Policy:
    - Scoped to the caller's store
    - Create respects plan.category_limit (NULL = unlimited)
    """

    serializer_class = CategorySerializer
    permission_classes = [IsAuthenticated, HasStore]
    pagination_class = None
    search_fields = ["name"]
    ordering_fields = ["created_at", "name"]

    def get_store(self):
        if not hasattr(self, "_store"):
            self._store = get_owned_store(self.request.user)
        return self._store

    def get_queryset(self):
        return (
            Category.objects.filter(store=self.get_store())
            .annotate(product_count=Count("products"))
            .order_by("created_at")
        )

    def perform_create(self, serializer):
        store = self.get_store()
        limit = store.plan.category_limit if store.plan else None

        if limit is not None:
            used = Category.objects.filter(store=store).count()
            if used >= limit:
                raise PermissionDenied(f"Your plan allows only {limit} categories")

        serializer.save(store=store)
