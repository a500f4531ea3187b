# products/serializers/category.py

from rest_framework import serializers

from products.models import Category


class CategorySerializer(serializers.ModelSerializer):
    """
    Category serializer.

    Rules:
    - store is taken from the caller, never from the payload
    - id + created_at are read-only
    """

    name = serializers.CharField(required=True, allow_blank=False, max_length=255)
    product_count = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = Category
        fields = ["id", "name", "category_url", "product_count", "created_at"]
        read_only_fields = ["id", "product_count", "created_at"]

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v

    def get_product_count(self, obj) -> int:
        annotated = getattr(obj, "product_count", None)
        if annotated is not None:
            return int(annotated)
        return obj.products.count()
