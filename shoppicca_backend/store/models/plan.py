# store/models/plan.py

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Plan(models.Model):
    """
    Subscription plan.

    Limits:
    - category_limit: max categories per store (NULL = unlimited)
    - products_per_category: max products in one category (NULL = unlimited)
    """

    NAME_FREE = "free"
    NAME_PAID = "paid"

    NAME_CHOICES = [
        (NAME_FREE, "Free"),
        (NAME_PAID, "Paid"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=32, choices=NAME_CHOICES, unique=True)
    price_cedis = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    category_limit = models.PositiveIntegerField(null=True, blank=True)
    products_per_category = models.PositiveIntegerField(null=True, blank=True)

    can_customize_theme = models.BooleanField(default=False)
    can_change_slug = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["price_cedis", "name"]

    @property
    def is_paid(self) -> bool:
        return Decimal(self.price_cedis or 0) > Decimal("0.00")

    def __str__(self):
        return f"{self.get_name_display()} (GHC {self.price_cedis})"
