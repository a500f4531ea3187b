# billing/services/checkout.py

"""
SUBSCRIPTION CHECKOUT

start_checkout():
- records a SubscriptionPayment (status=initiated) with the onboarding details
- initializes a Paystack transaction whose callback returns to this backend

complete_checkout():
- verifies the reference server-side with Paystack (never trusts the browser)
- provisions the store + subscription, idempotent per reference
"""

from __future__ import annotations

import logging
from decimal import Decimal
from urllib.parse import quote, urlparse

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError

from billing.models import SubscriptionPayment
from billing.services.paystack import (
    PaystackError,
    PaystackInitResult,
    default_currency,
    generate_reference,
    initialize_transaction,
    verify_transaction,
)
from store.models import Plan, Store
from store.services.onboarding import OnboardingError, create_store_with_subscription

logger = logging.getLogger(__name__)

DEFAULT_APP_URL = "http://localhost:3000"

ONBOARDING_KEYS = (
    "store_name",
    "slug",
    "store_category",
    "description",
    "whatsapp_number",
    "instagram_url",
    "snapchat_url",
    "linkedin_url",
)


class CheckoutError(RuntimeError):
    pass


class PaymentNotVerifiedError(CheckoutError):
    pass


class ProvisioningError(CheckoutError):
    pass


def app_base_url() -> str:
    base = (getattr(settings, "APP_URL", "") or "").strip()
    parsed = urlparse(base)
    if not parsed.scheme or not parsed.netloc:
        if base:
            logger.warning("Invalid APP_URL detected", extra={"app_url": base})
        return DEFAULT_APP_URL
    return base.rstrip("/")


def callback_url(reference: str) -> str:
    return f"{app_base_url()}/api/subscription/callback?reference={quote(reference, safe='')}"


def onboarding_redirect(**params) -> str:
    query = "&".join(f"{k}={quote(str(v), safe='')}" for k, v in params.items())
    return f"{app_base_url()}/onboarding?{query}"


def start_checkout(*, user, plan: Plan, onboarding: dict) -> tuple[SubscriptionPayment, PaystackInitResult]:
    reference = generate_reference()
    onboarding = {k: onboarding.get(k) for k in ONBOARDING_KEYS}

    payment = SubscriptionPayment.objects.create(
        user=user,
        plan=plan,
        reference=reference,
        amount=Decimal(plan.price_cedis),
        currency=default_currency(),
        onboarding=onboarding,
    )

    metadata = {"user_id": str(user.id), "plan_id": str(plan.id), **onboarding}

    try:
        init = initialize_transaction(
            email=user.email,
            amount_cedis=plan.price_cedis,
            reference=reference,
            callback_url=callback_url(reference),
            metadata=metadata,
            currency=payment.currency,
        )
    except PaystackError:
        payment.mark_failed()
        payment.save(update_fields=["status"])
        raise

    payment.authorization_url = init.authorization_url
    payment.save(update_fields=["authorization_url"])

    logger.info(
        "Subscription checkout initialized",
        extra={"reference": reference, "plan": plan.name, "user_id": str(user.id)},
    )
    return payment, init


def _lookup(model, pk):
    if not pk:
        return None
    try:
        return model.objects.filter(pk=pk).first()
    except (ValidationError, ValueError):
        return None


def complete_checkout(reference: str) -> Store:
    """
    Raises:
    - PaystackError: gateway unreachable / rejected the lookup
    - PaymentNotVerifiedError: payment not successful (or underpaid)
    - ProvisioningError: verified, but the store could not be created
    """
    verification = verify_transaction(reference=reference)

    payment = (
        SubscriptionPayment.objects.select_related("user", "plan")
        .filter(reference=reference)
        .first()
    )

    if not verification.is_success:
        if payment is not None and payment.status != SubscriptionPayment.STATUS_VERIFIED:
            payment.mark_failed(verification.raw)
            payment.save(update_fields=["status", "provider_payload"])
        raise PaymentNotVerifiedError(f"Payment status: {verification.status or 'unknown'}")

    if payment is not None:
        if verification.amount is not None and verification.amount < payment.amount_minor:
            logger.warning(
                "Paystack amount lower than plan price",
                extra={
                    "reference": reference,
                    "paid": verification.amount,
                    "expected": payment.amount_minor,
                },
            )
            raise PaymentNotVerifiedError("Amount paid is less than the plan price")
        owner, plan, onboarding = payment.user, payment.plan, payment.onboarding or {}
    else:
        # Reference issued before this backend recorded payments
        metadata = verification.metadata or {}
        owner = _lookup(get_user_model(), metadata.get("user_id"))
        plan = _lookup(Plan, metadata.get("plan_id"))
        onboarding = metadata

    if owner is None or plan is None:
        raise ProvisioningError("Payment metadata does not identify a user and plan")

    try:
        store, created = create_store_with_subscription(
            owner=owner,
            plan=plan,
            name=onboarding.get("store_name") or "",
            slug=onboarding.get("slug") or "",
            category=onboarding.get("store_category"),
            description=onboarding.get("description"),
            whatsapp_number=onboarding.get("whatsapp_number"),
            instagram_url=onboarding.get("instagram_url"),
            snapchat_url=onboarding.get("snapchat_url"),
            linkedin_url=onboarding.get("linkedin_url"),
            payment_reference=reference,
        )
    except OnboardingError as exc:
        raise ProvisioningError(str(exc)) from exc

    if payment is not None and (payment.status != SubscriptionPayment.STATUS_VERIFIED or payment.store_id != store.id):
        payment.mark_verified(verification.raw)
        payment.store = store
        payment.save(update_fields=["status", "verified_at", "provider_payload", "store"])

    logger.info(
        "Subscription checkout completed",
        extra={"reference": reference, "store_id": str(store.id), "created": created},
    )
    return store
