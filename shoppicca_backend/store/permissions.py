# store/permissions.py

from rest_framework.exceptions import NotFound
from rest_framework.permissions import BasePermission

from store.models import Store


def get_owned_store(user) -> Store:
    """
    The caller's store, or 404 if they haven't onboarded yet.
    """
    store = (
        Store.objects.select_related("plan")
        .filter(owner_id=getattr(user, "id", None))
        .first()
    )
    if store is None:
        raise NotFound("You don't have a store yet")
    return store


class HasStore(BasePermission):
    """
    Owner dashboard endpoints: authenticated user that owns a store.
    """

    message = "You don't have a store yet"

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return Store.objects.filter(owner_id=user.id).exists()
