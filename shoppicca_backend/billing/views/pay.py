# billing/views/pay.py
"""
PAID PLAN CHECKOUT

POST /api/subscription/pay/

Rules:
- Authenticated owner without a store
- Plan must exist (404) and be a paid plan
- Slug is checked up front so the customer doesn't pay for a taken URL
- Store is NOT created here; the verified callback provisions it
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from billing.serializers import SubscriptionPayResponseSerializer, SubscriptionPaySerializer
from billing.services.checkout import start_checkout
from billing.services.paystack import PaystackError
from store.models import Plan, Store
from store.services.slugs import slug_error

logger = logging.getLogger(__name__)


class SubscriptionPayView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Billing"],
        request=SubscriptionPaySerializer,
        responses={
            200: SubscriptionPayResponseSerializer,
            400: OpenApiResponse(description="Validation error / slug unavailable"),
            404: OpenApiResponse(description="Plan not found"),
            500: OpenApiResponse(description="Payment gateway failure"),
        },
    )
    def post(self, request):
        serializer = SubscriptionPaySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        plan = Plan.objects.filter(id=data["planId"]).first()
        if plan is None:
            return Response({"error": "Plan not found"}, status=status.HTTP_404_NOT_FOUND)

        if not plan.is_paid:
            return Response(
                {"error": "This plan is free; create your store directly"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        if Store.objects.filter(owner=request.user).exists():
            return Response(
                {"error": "You already have a store"}, status=status.HTTP_400_BAD_REQUEST
            )

        error = slug_error(data["slug"])
        if error:
            return Response({"error": error}, status=status.HTTP_400_BAD_REQUEST)

        try:
            payment, init = start_checkout(
                user=request.user, plan=plan, onboarding=serializer.onboarding()
            )
        except PaystackError as exc:
            logger.error(
                "Paystack initialize failed",
                extra={"user_id": str(request.user.id), "plan": plan.name, "error": str(exc)},
            )
            return Response(
                {"error": "Failed to initialize payment"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {"authorization_url": init.authorization_url, "reference": init.reference},
            status=status.HTTP_200_OK,
        )
