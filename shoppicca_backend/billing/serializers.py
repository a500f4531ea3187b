# billing/serializers.py

from rest_framework import serializers

from store.validators import normalize_whatsapp_number


class SubscriptionPaySerializer(serializers.Serializer):
    """
    Onboarding form payload (camelCase, as the web client sends it).
    """

    planId = serializers.UUIDField()
    storeName = serializers.CharField(max_length=255)
    slug = serializers.CharField(max_length=50)
    storeCategory = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    whatsappNumber = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)
    instagramUrl = serializers.URLField(required=False, allow_blank=True, allow_null=True)
    snapchatUrl = serializers.URLField(required=False, allow_blank=True, allow_null=True)
    linkedinUrl = serializers.URLField(required=False, allow_blank=True, allow_null=True)

    def validate_storeName(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Store name is required")
        return value

    def validate_slug(self, value):
        return (value or "").strip().lower()

    def validate_whatsappNumber(self, value):
        return normalize_whatsapp_number(value)

    def onboarding(self) -> dict:
        data = self.validated_data
        return {
            "store_name": data["storeName"],
            "slug": data["slug"],
            "store_category": data.get("storeCategory") or None,
            "description": data.get("description") or None,
            "whatsapp_number": data.get("whatsappNumber") or None,
            "instagram_url": data.get("instagramUrl") or None,
            "snapchat_url": data.get("snapchatUrl") or None,
            "linkedin_url": data.get("linkedinUrl") or None,
        }


class SubscriptionPayResponseSerializer(serializers.Serializer):
    authorization_url = serializers.URLField()
    reference = serializers.CharField()
