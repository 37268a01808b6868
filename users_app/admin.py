"""
users_app.admin — Django admin configuration for the identity models

Includes:
- UserProfile with contact and push-token fields
- AdminAccount with a password-hashing form
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from users_app.forms import AdminAccountForm, UserProfileCreationForm
from users_app.models import AdminAccount, UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(UserAdmin):
    """
    Extends default UserAdmin with:
    - Custom creation form (UserProfileCreationForm)
    - Contact info and push token
    """

    add_form = UserProfileCreationForm
    list_display = ("email", "name", "phone_number", "is_active", "id")

    fieldsets = (
        *UserAdmin.fieldsets,
        (
            "Additional Info",
            {
                "fields": (
                    "name",
                    "phone_number",
                    "push_token",
                )
            },
        ),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "email", "name", "phone_number",
                           "password1", "password2"),
            },
        ),
    )


@admin.register(AdminAccount)
class AdminAccountAdmin(admin.ModelAdmin):
    form = AdminAccountForm
    list_display = ("email", "created_at", "id")
    readonly_fields = ("created_at",)
