# store/admin.py

from django.contrib import admin

from store.models import Plan, Store, Subscription


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "price_cedis",
        "category_limit",
        "products_per_category",
        "can_customize_theme",
        "can_change_slug",
    )
    ordering = ("price_cedis",)


class SubscriptionInline(admin.TabularInline):
    model = Subscription
    extra = 0
    fields = ("plan", "status", "start_date", "end_date")


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "owner", "plan", "created_at")
    list_filter = ("plan",)
    search_fields = ("name", "slug", "owner__email")
    readonly_fields = ("payment_reference", "created_at", "updated_at")
    inlines = [SubscriptionInline]


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ("store", "plan", "status", "start_date", "end_date")
    list_filter = ("status", "plan")
    search_fields = ("store__slug",)
