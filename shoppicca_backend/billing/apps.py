# billing/apps.py

"""
BILLING APP CONFIG

Paid-plan checkout: payment initialization, gateway callback and
store provisioning once a payment is verified.
"""

from django.apps import AppConfig


class BillingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "billing"
    verbose_name = "Billing"
