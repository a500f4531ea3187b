# store/models/store.py

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q

from .plan import Plan


class Store(models.Model):
    """
    A tenant: one owner's shop, served at <slug>.<root domain>.

    Guarantees:
    - slug is unique (it is the subdomain label)
    - one store per owner
    - payment_reference, when set, is unique: paid onboarding is idempotent
      per gateway reference
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    owner = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="store",
    )

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=50, unique=True)

    category = models.CharField(max_length=100, null=True, blank=True)
    description = models.TextField(null=True, blank=True)

    whatsapp_number = models.CharField(max_length=32, null=True, blank=True)
    instagram_url = models.URLField(null=True, blank=True)
    snapchat_url = models.URLField(null=True, blank=True)
    linkedin_url = models.URLField(null=True, blank=True)

    theme_color = models.CharField(max_length=16, null=True, blank=True)
    accent_color = models.CharField(max_length=16, null=True, blank=True)
    banner_url = models.URLField(max_length=500, null=True, blank=True)

    plan = models.ForeignKey(
        Plan,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="stores",
    )

    payment_reference = models.CharField(max_length=128, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["payment_reference"],
                condition=Q(payment_reference__isnull=False) & ~Q(payment_reference=""),
                name="uniq_store_payment_reference_when_present",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.slug})"
