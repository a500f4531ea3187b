# users/admin.py

"""
USERS ADMIN REGISTRATION

Registers the custom User model so platform staff can manage store owners.
Forms are re-declared because the stock ones assume a "username" field.
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.contrib.auth.forms import BaseUserCreationForm, UserChangeForm

User = get_user_model()


class OwnerCreationForm(BaseUserCreationForm):
    class Meta:
        model = User
        fields = ("email", "full_name", "phone")


class OwnerChangeForm(UserChangeForm):
    class Meta:
        model = User
        fields = "__all__"


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    form = OwnerChangeForm
    add_form = OwnerCreationForm

    ordering = ("email",)
    list_display = ("email", "full_name", "phone", "is_staff", "is_active")
    list_filter = ("is_staff", "is_active", "is_superuser")
    search_fields = ("email", "full_name", "phone")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("full_name", "phone")}),
        (
            "Permissions",
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                )
            },
        ),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "full_name", "phone", "password1", "password2"),
            },
        ),
    )
