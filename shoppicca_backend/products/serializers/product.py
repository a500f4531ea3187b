# products/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Canonical Product serializer for the owner dashboard and the storefront.
- Writes accept flat image URLs and key/value attributes; both sets are
  replaced wholesale on update.
- Reads return images ordered by position and attributes.
"""

from django.db import transaction
from rest_framework import serializers

from products.models import Category, Product, ProductAttribute, ProductImage


class ProductImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductImage
        fields = ["id", "image_url", "position"]
        read_only_fields = fields


class ProductAttributeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductAttribute
        fields = ["id", "key", "value"]
        read_only_fields = fields


class ProductAttributeInputSerializer(serializers.Serializer):
    key = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    value = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


def clean_attributes(pairs):
    """
    Trim keys/values and drop pairs where either side is blank.
    """
    cleaned = []
    for pair in pairs or []:
        key = (pair.get("key") or "").strip()
        value = (pair.get("value") or "").strip()
        if key and value:
            cleaned.append({"key": key, "value": value})
    return cleaned


def replace_images(product, urls):
    product.images.all().delete()
    ProductImage.objects.bulk_create(
        [
            ProductImage(product=product, image_url=url, position=index)
            for index, url in enumerate(u for u in urls if u)
        ]
    )


def replace_attributes(product, pairs):
    product.attributes.all().delete()
    ProductAttribute.objects.bulk_create(
        [ProductAttribute(product=product, **pair) for pair in clean_attributes(pairs)]
    )


class ProductSerializer(serializers.ModelSerializer):
    """
    GUARANTEES:
    - price_type "dm" always stores price = NULL
    - category must belong to the caller's store (context["store"])
    - images/attributes replace previous sets when provided
    """

    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(), required=False, allow_null=True
    )
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)

    images = serializers.ListField(
        child=serializers.URLField(max_length=500), required=False, write_only=True
    )
    attributes = ProductAttributeInputSerializer(many=True, required=False, write_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "store",
            "category",
            "category_name",
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
        read_only_fields = ["id", "store", "category_name", "created_at", "updated_at"]

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Product name is required")
        return value

    def validate_price(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Price must be non-negative")
        return value

    def validate_category(self, value):
        store = self.context.get("store")
        if value is not None and store is not None and value.store_id != store.id:
            raise serializers.ValidationError("Invalid category")
        return value

    def validate(self, attrs):
        price_type = attrs.get("price_type")
        if price_type is None and self.instance is not None:
            price_type = self.instance.price_type
        if price_type == Product.PriceType.DM:
            attrs["price"] = None
        return attrs

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["images"] = ProductImageSerializer(instance.images.all(), many=True).data
        data["attributes"] = ProductAttributeSerializer(instance.attributes.all(), many=True).data
        return data

    @transaction.atomic
    def create(self, validated_data):
        images = validated_data.pop("images", None)
        attributes = validated_data.pop("attributes", None)

        product = Product.objects.create(**validated_data)

        if images:
            replace_images(product, images)
        if attributes:
            replace_attributes(product, attributes)
        return product

    @transaction.atomic
    def update(self, instance, validated_data):
        images = validated_data.pop("images", None)
        attributes = validated_data.pop("attributes", None)

        instance = super().update(instance, validated_data)

        if images is not None:
            replace_images(instance, images)
        if attributes is not None:
            replace_attributes(instance, attributes)
        return instance
