# products/models/category.py

import uuid

from django.db import models

from store.models import Store


class Category(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="categories")

    name = models.CharField(max_length=255)
    # Cover image shown on the storefront
    category_url = models.URLField(max_length=500, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name
