"""
PATH: billing/models/__init__.py
"""

from .payment import SubscriptionPayment

__all__ = ["SubscriptionPayment"]
