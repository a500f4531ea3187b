# billing/models/payment.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class SubscriptionPayment(models.Model):
    """
    One checkout attempt for a paid plan.

    Idempotency rule:
    - reference is unique (Paystack reference)
    - the callback provisions at most one store per reference
    - onboarding holds the store details captured at checkout; the callback
      uses this server-side copy, not what the browser sends back
    """

    PROVIDER_PAYSTACK = "paystack"
    PROVIDER_CHOICES = [
        (PROVIDER_PAYSTACK, "Paystack"),
    ]

    STATUS_INITIATED = "initiated"
    STATUS_VERIFIED = "verified"
    STATUS_FAILED = "failed"

    STATUS_CHOICES = [
        (STATUS_INITIATED, "Initiated"),
        (STATUS_VERIFIED, "Verified"),
        (STATUS_FAILED, "Failed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="subscription_payments",
    )
    plan = models.ForeignKey(
        "store.Plan",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    store = models.ForeignKey(
        "store.Store",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payments",
    )

    provider = models.CharField(max_length=32, choices=PROVIDER_CHOICES, default=PROVIDER_PAYSTACK)

    reference = models.CharField(
        max_length=128,
        unique=True,
        help_text="Provider reference (Paystack reference). Must be unique for idempotency.",
    )

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    currency = models.CharField(max_length=8, default="GHS")

    status = models.CharField(max_length=32, choices=STATUS_CHOICES, default=STATUS_INITIATED)

    authorization_url = models.URLField(max_length=500, blank=True, default="")
    onboarding = models.JSONField(default=dict, blank=True)
    provider_payload = models.JSONField(default=dict, blank=True)

    initiated_at = models.DateTimeField(auto_now_add=True)
    verified_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-initiated_at"]
        indexes = [
            models.Index(fields=["status"], name="subpay_status_idx"),
            models.Index(fields=["user", "initiated_at"], name="subpay_user_initiated_idx"),
        ]

    @property
    def amount_minor(self) -> int:
        return int((Decimal(self.amount) * 100).to_integral_value())

    def mark_verified(self, payload=None):
        self.status = self.STATUS_VERIFIED
        self.verified_at = self.verified_at or timezone.now()
        if payload is not None:
            self.provider_payload = payload

    def mark_failed(self, payload=None):
        self.status = self.STATUS_FAILED
        if payload is not None:
            self.provider_payload = payload

    def __str__(self):
        return f"{self.provider}:{self.reference} | {self.status}"
