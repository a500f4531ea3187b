# store/urls.py

"""
Mounted under /api/ in backend/urls.py.
"""

from django.urls import path

from store.views import (
    CheckSlugView,
    PlanListView,
    StoreCreateView,
    StoreSettingsView,
    StoreStatsView,
)

app_name = "store"

urlpatterns = [
    path("plans/", PlanListView.as_view(), name="plans"),
    path("store/check-slug/", CheckSlugView.as_view(), name="check-slug"),
    path("store/create/", StoreCreateView.as_view(), name="store-create"),
    path("admin/store/", StoreSettingsView.as_view(), name="store-settings"),
    path("admin/stats/", StoreStatsView.as_view(), name="store-stats"),
]
