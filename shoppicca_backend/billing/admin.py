# billing/admin.py

from django.contrib import admin

from billing.models import SubscriptionPayment


@admin.register(SubscriptionPayment)
class SubscriptionPaymentAdmin(admin.ModelAdmin):
    list_display = ("reference", "user", "plan", "amount", "currency", "status", "store", "initiated_at")
    list_filter = ("status", "provider", "plan")
    search_fields = ("reference", "user__email", "store__slug")
    readonly_fields = (
        "reference",
        "amount",
        "currency",
        "authorization_url",
        "onboarding",
        "provider_payload",
        "initiated_at",
        "verified_at",
    )
