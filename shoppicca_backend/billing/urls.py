# billing/urls.py
"""
Mounted under /api/subscription/ in backend/urls.py.

The callback path carries no trailing slash: it is the exact URL handed
to Paystack as callback_url.
"""

from django.urls import path

from billing.views import SubscriptionCallbackView, SubscriptionPayView

app_name = "billing"

urlpatterns = [
    path("pay/", SubscriptionPayView.as_view(), name="subscription-pay"),
    path("callback", SubscriptionCallbackView.as_view(), name="subscription-callback"),
]
