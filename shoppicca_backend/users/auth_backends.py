"""
PATH: users/auth_backends.py

AUTH BACKEND: email login (case-insensitive)

Used by Django auth(), the admin site and the API login view.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

User = get_user_model()


class EmailBackend(ModelBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        # Django passes the identifier as "username"; API callers pass email=...
        identifier = (username or kwargs.get("email") or "").strip()
        if not identifier or password is None:
            return None

        try:
            user = User.objects.get(email__iexact=identifier)
        except User.DoesNotExist:
            # Run the hasher anyway to keep timing uniform
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user

        return None
