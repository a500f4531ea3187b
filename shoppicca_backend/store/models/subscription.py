# store/models/subscription.py

import uuid

from django.db import models
from django.db.models import Q
from django.utils import timezone

from .plan import Plan
from .store import Store


class Subscription(models.Model):
    """
    A store's subscription to a plan.

    Rule: at most one ACTIVE subscription per store.
    """

    STATUS_ACTIVE = "active"
    STATUS_EXPIRED = "expired"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_EXPIRED, "Expired"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="subscriptions")
    plan = models.ForeignKey(Plan, on_delete=models.PROTECT, related_name="subscriptions")

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    start_date = models.DateTimeField(default=timezone.now)
    end_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-start_date"]
        constraints = [
            models.UniqueConstraint(
                fields=["store"],
                condition=Q(status="active"),
                name="uniq_active_subscription_per_store",
            ),
        ]

    @property
    def is_current(self) -> bool:
        if self.status != self.STATUS_ACTIVE:
            return False
        return self.end_date is None or self.end_date > timezone.now()

    def __str__(self):
        return f"{self.store.slug} -> {self.plan.name} | {self.status}"
