# PATH: public/serializers.py

"""
PATH: public/serializers.py

PUBLIC SERIALIZERS (STOREFRONT)

Purpose:
- Shared schema contracts for the public storefront endpoints.
- Keeps public/views thin and consistent.

Notes:
- Request serializers validate shapes only; business rules live in
  public/services.
"""

from __future__ import annotations

from rest_framework import serializers

from products.models import Category, Product
from products.serializers.product import ProductAttributeSerializer, ProductImageSerializer
from store.serializers import StoreSerializer


# -----------------------------
# READ MODELS
# -----------------------------
class PublicCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "category_url", "created_at"]


class PublicProductSerializer(serializers.ModelSerializer):
    images = ProductImageSerializer(many=True, read_only=True)
    attributes = ProductAttributeSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "store",
            "category",
            "name",
            "description",
            "price",
            "price_type",
            "is_visible",
            "images",
            "attributes",
            "created_at",
            "updated_at",
        ]


class PublicProductDetailSerializer(PublicProductSerializer):
    category = PublicCategorySerializer(read_only=True)


class StorefrontSerializer(serializers.Serializer):
    store = StoreSerializer()
    categories = PublicCategorySerializer(many=True)
    products = PublicProductSerializer(many=True)


# -----------------------------
# WISHLIST
# -----------------------------
class WishlistItemSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True)
    name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True, default=None
    )
    price_type = serializers.ChoiceField(
        choices=Product.PriceType.choices, default=Product.PriceType.FIXED
    )
    image_url = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class WishlistSendSerializer(serializers.Serializer):
    items = WishlistItemSerializer(many=True, required=False, default=list)
    storeName = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    whatsappNumber = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")


class WishlistItemSummarySerializer(serializers.Serializer):
    name = serializers.CharField()
    price = serializers.CharField()


class WishlistSendResponseSerializer(serializers.Serializer):
    whatsapp_url = serializers.CharField()
    message_preview = serializers.CharField()
    items_summary = WishlistItemSummarySerializer(many=True)


# -----------------------------
# CONTACT SMS
# -----------------------------
class ContactSmsSerializer(serializers.Serializer):
    smsMessage = serializers.CharField(max_length=1000, trim_whitespace=True)
