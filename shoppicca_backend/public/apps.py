# public/apps.py

"""
PUBLIC APP CONFIG

Public storefront (AllowAny) module:
- Storefront payload, search and product detail
- WhatsApp wishlist hand-off
- Contact form SMS relay
"""

from django.apps import AppConfig


class PublicConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "public"
    verbose_name = "Public Storefront"
