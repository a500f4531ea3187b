# billing/views/callback.py

from __future__ import annotations

import logging

from django.shortcuts import redirect
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from billing.services.checkout import (
    PaymentNotVerifiedError,
    ProvisioningError,
    complete_checkout,
    onboarding_redirect,
)

logger = logging.getLogger(__name__)


class SubscriptionCallbackView(APIView):
    """
    GET /api/subscription/callback?reference=<ref>

    Paystack redirects the customer here after checkout. The outcome is
    always a redirect back to the onboarding page:
    - ?error=missing_reference
    - ?error=payment_failed
    - ?error=store_creation_failed
    - ?error=internal_error
    - ?success=true&slug=<slug>
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        tags=["Billing"],
        parameters=[
            OpenApiParameter(name="reference", type=str, location=OpenApiParameter.QUERY, required=True),
        ],
        responses={302: OpenApiResponse(description="Redirect to /onboarding")},
    )
    def get(self, request, *args, **kwargs):
        reference = (request.query_params.get("reference") or "").strip()

        if not reference:
            logger.warning("Callback without reference")
            return redirect(onboarding_redirect(error="missing_reference"))

        try:
            store = complete_checkout(reference)
        except PaymentNotVerifiedError as exc:
            logger.warning("Payment not verified", extra={"reference": reference, "error": str(exc)})
            return redirect(onboarding_redirect(error="payment_failed"))
        except ProvisioningError as exc:
            logger.error("Store creation failed", extra={"reference": reference, "error": str(exc)})
            return redirect(onboarding_redirect(error="store_creation_failed"))
        except Exception:
            logger.exception("Payment callback error", extra={"reference": reference})
            return redirect(onboarding_redirect(error="internal_error"))

        logger.info("Callback redirecting to onboarding", extra={"reference": reference, "slug": store.slug})
        return redirect(onboarding_redirect(success="true", slug=store.slug))
