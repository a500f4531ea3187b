# store/serializers.py

from rest_framework import serializers

from store.models import Plan, Store, Subscription
from store.services.slugs import slug_error
from store.validators import normalize_whatsapp_number, validate_hex_color


class PlanSerializer(serializers.ModelSerializer):
    class Meta:
        model = Plan
        fields = [
            "id",
            "name",
            "price_cedis",
            "category_limit",
            "products_per_category",
            "can_customize_theme",
            "can_change_slug",
        ]
        read_only_fields = fields


class SubscriptionSerializer(serializers.ModelSerializer):
    plan_name = serializers.CharField(source="plan.name", read_only=True)

    class Meta:
        model = Subscription
        fields = ["id", "plan", "plan_name", "status", "start_date", "end_date"]
        read_only_fields = fields


class StoreSerializer(serializers.ModelSerializer):
    """
    Store as shown on the storefront and the owner dashboard.
    """

    plan = PlanSerializer(read_only=True)

    class Meta:
        model = Store
        fields = [
            "id",
            "name",
            "slug",
            "category",
            "description",
            "whatsapp_number",
            "instagram_url",
            "snapchat_url",
            "linkedin_url",
            "theme_color",
            "accent_color",
            "banner_url",
            "plan",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class _StoreFieldsMixin:
    def validate_whatsapp_number(self, value):
        return normalize_whatsapp_number(value)

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Store name is required")
        return value


class StoreCreateSerializer(_StoreFieldsMixin, serializers.Serializer):
    """
    Free-plan onboarding payload.
    """

    name = serializers.CharField(max_length=255)
    slug = serializers.CharField(max_length=50)
    plan_id = serializers.UUIDField(required=False, allow_null=True)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    whatsapp_number = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)
    instagram_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)
    snapchat_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)
    linkedin_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)

    def validate_slug(self, value):
        value = (value or "").strip().lower()
        error = slug_error(value)
        if error:
            raise serializers.ValidationError(error)
        return value

    def validate(self, attrs):
        plan_id = attrs.pop("plan_id", None)
        if plan_id:
            plan = Plan.objects.filter(id=plan_id).first()
            if plan is None:
                raise serializers.ValidationError({"plan_id": "Plan not found"})
        else:
            plan = Plan.objects.filter(name=Plan.NAME_FREE).first()
            if plan is None:
                raise serializers.ValidationError({"plan_id": "No free plan is configured"})

        if plan.is_paid:
            raise serializers.ValidationError(
                {"plan_id": "Paid plans must be purchased through checkout"}
            )

        attrs["plan"] = plan
        return attrs


class StoreSettingsSerializer(_StoreFieldsMixin, serializers.ModelSerializer):
    """
    Owner-editable store settings. Plan gating is enforced by the view.
    """

    plan = PlanSerializer(read_only=True)

    class Meta:
        model = Store
        fields = [
            "id",
            "name",
            "slug",
            "category",
            "description",
            "whatsapp_number",
            "instagram_url",
            "snapchat_url",
            "linkedin_url",
            "theme_color",
            "accent_color",
            "banner_url",
            "plan",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "plan", "created_at", "updated_at"]

    def validate_slug(self, value):
        value = (value or "").strip().lower()
        if self.instance is not None and value == self.instance.slug:
            return value
        error = slug_error(value, exclude_store_id=getattr(self.instance, "id", None))
        if error:
            raise serializers.ValidationError(error)
        return value

    def validate_theme_color(self, value):
        return validate_hex_color(value)

    def validate_accent_color(self, value):
        return validate_hex_color(value)
