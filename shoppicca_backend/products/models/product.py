# products/models/product.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models

from store.models import Store

from .category import Category


class Product(models.Model):
    """
    A storefront listing.

    PRICING:
    - fixed:      price shown as-is
    - negotiable: price shown with a "(Negotiable)" hint
    - dm:         no price; customers ask on WhatsApp (price forced to NULL)
    """

    class PriceType(models.TextChoices):
        FIXED = "fixed", "Fixed"
        NEGOTIABLE = "negotiable", "Negotiable"
        DM = "dm", "DM for price"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="products")
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(null=True, blank=True)

    price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    price_type = models.CharField(
        max_length=16,
        choices=PriceType.choices,
        default=PriceType.FIXED,
    )

    is_visible = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["store", "is_visible"], name="product_store_visible_idx"),
        ]

    def clean(self):
        if self.price is not None and self.price < 0:
            raise ValidationError({"price": "Price must be non-negative"})
        if self.category_id and self.category.store_id != self.store_id:
            raise ValidationError({"category": "Category belongs to another store"})

    def save(self, *args, **kwargs):
        if self.price_type == self.PriceType.DM:
            self.price = None
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class ProductImage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="images")
    image_url = models.URLField(max_length=500)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position"]

    def __str__(self):
        return f"{self.product.name} #{self.position}"


class ProductAttribute(models.Model):
    """
    Free-form key/value detail, e.g. Size=42, Color=Black.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="attributes")
    key = models.CharField(max_length=100)
    value = models.CharField(max_length=255)

    class Meta:
        ordering = ["key"]

    def __str__(self):
        return f"{self.key}: {self.value}"
