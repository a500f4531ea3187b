# store/apps.py

"""
STORE APP CONFIG

Tenants (stores), subscription plans and subscriptions.
"""

from django.apps import AppConfig


class StoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "store"
    verbose_name = "Stores"
