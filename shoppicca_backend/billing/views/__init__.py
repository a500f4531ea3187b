from .callback import SubscriptionCallbackView
from .pay import SubscriptionPayView

__all__ = ["SubscriptionCallbackView", "SubscriptionPayView"]
