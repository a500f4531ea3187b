# tenancy/apps.py

"""
TENANCY APP CONFIG

Host-based tenant routing:
- Resolve the tenant slug from the Host header
- Rewrite tenant requests to the storefront entry point (/store/<slug>)
"""

from django.apps import AppConfig


class TenancyConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "tenancy"
    verbose_name = "Tenant Routing"
