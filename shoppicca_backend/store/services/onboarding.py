# store/services/onboarding.py

"""
STORE ONBOARDING SERVICE

Creates a store together with its first subscription in one transaction.
Shared by free-plan onboarding and the payment callback.

GUARANTEES:
- Store and active Subscription are created together or not at all
- Paid plans get a fixed-length period; free plans are open-ended
- With a payment_reference, creation is idempotent: a retried call
  returns the store already created for that reference
"""

from __future__ import annotations

import logging
from datetime import timedelta

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from store.models import Plan, Store, Subscription
from store.services.slugs import slug_error

logger = logging.getLogger(__name__)

DEFAULT_SUBSCRIPTION_PERIOD_DAYS = 30


class OnboardingError(RuntimeError):
    pass


class SlugUnavailableError(OnboardingError):
    pass


class StoreAlreadyExistsError(OnboardingError):
    pass


def subscription_period_days() -> int:
    return int(
        getattr(settings, "SUBSCRIPTION_PERIOD_DAYS", DEFAULT_SUBSCRIPTION_PERIOD_DAYS)
    )


def _clean(value):
    value = (value or "").strip() if isinstance(value, str) else value
    return value or None


def create_store_with_subscription(
    *,
    owner,
    plan: Plan,
    name: str,
    slug: str,
    category: str | None = None,
    description: str | None = None,
    whatsapp_number: str | None = None,
    instagram_url: str | None = None,
    snapchat_url: str | None = None,
    linkedin_url: str | None = None,
    payment_reference: str | None = None,
) -> tuple[Store, bool]:
    """
    Returns (store, created).
    """
    if payment_reference:
        existing = (
            Store.objects.select_related("plan")
            .filter(payment_reference=payment_reference)
            .first()
        )
        if existing is not None:
            logger.info(
                "Store already onboarded for payment reference",
                extra={"reference": payment_reference, "store_id": str(existing.id)},
            )
            return existing, False

    if Store.objects.filter(owner=owner).exists():
        raise StoreAlreadyExistsError("You already have a store")

    name = (name or "").strip()
    if not name:
        raise OnboardingError("Store name is required")

    slug = (slug or "").strip().lower()
    error = slug_error(slug)
    if error:
        raise SlugUnavailableError(error)

    now = timezone.now()
    end_date = now + timedelta(days=subscription_period_days()) if plan.is_paid else None

    try:
        with transaction.atomic():
            store = Store.objects.create(
                owner=owner,
                plan=plan,
                name=name,
                slug=slug,
                category=_clean(category),
                description=_clean(description),
                whatsapp_number=_clean(whatsapp_number),
                instagram_url=_clean(instagram_url),
                snapchat_url=_clean(snapchat_url),
                linkedin_url=_clean(linkedin_url),
                payment_reference=_clean(payment_reference),
            )
            Subscription.objects.create(
                store=store,
                plan=plan,
                status=Subscription.STATUS_ACTIVE,
                start_date=now,
                end_date=end_date,
            )
    except IntegrityError as exc:
        # Lost a race on slug / owner / reference
        if payment_reference:
            existing = Store.objects.filter(payment_reference=payment_reference).first()
            if existing is not None:
                return existing, False
        raise SlugUnavailableError("This slug is already taken") from exc

    logger.info(
        "Store created",
        extra={
            "store_id": str(store.id),
            "slug": store.slug,
            "plan": plan.name,
            "reference": payment_reference,
        },
    )
    return store, True
