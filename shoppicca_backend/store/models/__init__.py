"""
PATH: store/models/__init__.py

Store models export surface.
"""

from .plan import Plan
from .store import Store
from .subscription import Subscription

__all__ = ["Plan", "Store", "Subscription"]
