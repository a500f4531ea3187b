# store/views.py

"""
STORE ENDPOINTS

Public:
- GET  /api/plans/
- GET  /api/store/check-slug/?slug=<slug>

Authenticated:
- POST /api/store/create/         (free-plan onboarding)

Owner dashboard:
- GET/PATCH /api/admin/store/
- GET       /api/admin/stats/
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.exceptions import PermissionDenied
from rest_framework.generics import ListAPIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from products.models import Category, Product
from public.throttles import PublicCatalogThrottle
from store.models import Plan
from store.permissions import HasStore, get_owned_store
from store.serializers import (
    PlanSerializer,
    StoreCreateSerializer,
    StoreSettingsSerializer,
)
from store.services.onboarding import OnboardingError, create_store_with_subscription
from store.services.slugs import is_reserved_slug, is_slug_available, is_valid_slug

logger = logging.getLogger(__name__)


class PlanListView(ListAPIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]
    serializer_class = PlanSerializer
    pagination_class = None
    queryset = Plan.objects.all().order_by("price_cedis", "name")

    @extend_schema(tags=["Plans"])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class CheckSlugView(APIView):
    """
    Live availability check for the onboarding form.
    """

    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(
        tags=["Store"],
        parameters=[
            OpenApiParameter(name="slug", type=str, location=OpenApiParameter.QUERY, required=True),
        ],
        responses={200: OpenApiResponse(description="{slug, valid, available}")},
    )
    def get(self, request):
        slug = (request.query_params.get("slug") or "").strip().lower()

        valid = is_valid_slug(slug) and not is_reserved_slug(slug)
        available = valid and is_slug_available(slug)

        return Response({"slug": slug, "valid": valid, "available": available})


class StoreCreateView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Store"],
        request=StoreCreateSerializer,
        responses={
            201: StoreSettingsSerializer,
            400: OpenApiResponse(description="Validation error"),
        },
    )
    def post(self, request):
        serializer = StoreCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            store, _ = create_store_with_subscription(owner=request.user, **data)
        except OnboardingError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(StoreSettingsSerializer(store).data, status=status.HTTP_201_CREATED)


class StoreSettingsView(APIView):
    """
    Plan gates:
    - slug changes need plan.can_change_slug
    - theme/accent colors need plan.can_customize_theme
    """

    permission_classes = [IsAuthenticated, HasStore]

    @extend_schema(tags=["Owner"], responses={200: StoreSettingsSerializer})
    def get(self, request):
        store = get_owned_store(request.user)
        return Response(StoreSettingsSerializer(store).data)

    @extend_schema(
        tags=["Owner"],
        request=StoreSettingsSerializer,
        responses={
            200: StoreSettingsSerializer,
            403: OpenApiResponse(description="Plan does not allow this change"),
        },
    )
    def patch(self, request):
        store = get_owned_store(request.user)
        plan = store.plan

        serializer = StoreSettingsSerializer(store, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        changes = serializer.validated_data

        # Gates compare normalised values, so resubmitting the stored form is not a change
        if "slug" in changes and changes["slug"] != store.slug:
            if not (plan and plan.can_change_slug):
                raise PermissionDenied("Your plan does not allow changing the store URL")

        for field in ("theme_color", "accent_color"):
            if field in changes and changes[field] != getattr(store, field):
                if not (plan and plan.can_customize_theme):
                    raise PermissionDenied("Your plan does not allow theme customization")

        serializer.save()

        logger.info(
            "Store settings updated",
            extra={"store_id": str(store.id), "fields": sorted(serializer.validated_data)},
        )
        return Response(serializer.data)


class StoreStatsView(APIView):
    permission_classes = [IsAuthenticated, HasStore]

    @extend_schema(tags=["Owner"], responses={200: OpenApiResponse(description="Catalog counts")})
    def get(self, request):
        store = get_owned_store(request.user)
        products = Product.objects.filter(store=store)

        visible = products.filter(is_visible=True).count()
        total = products.count()

        return Response(
            {
                "categories": Category.objects.filter(store=store).count(),
                "products": total,
                "visible_products": visible,
                "hidden_products": total - visible,
            }
        )
