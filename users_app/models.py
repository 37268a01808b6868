"""
users_app.models — identity models for the VOD backend

Two separate identity spaces:
- UserProfile: viewers, created after email-code verification. At most one
  live session token per user (see users_app.sessions).
- AdminAccount: content administrators. Not an AUTH_USER_MODEL row and not
  bound by the single-session rule.
"""

from django.contrib.auth.hashers import check_password, make_password
from django.contrib.auth.models import AbstractUser
from django.db import models


class UserProfile(AbstractUser):
    """
    Custom user model extending Django’s AbstractUser.

    `username` is always filled with the (lower-cased) email address.

    Adds:
        name (CharField): Display name given at registration.
        email (EmailField): Unique login address.
        phone_number (CharField): Unique contact number.
        push_token (CharField): Optional device token for push notifications.
    """

    name = models.CharField(max_length=150)
    email = models.EmailField(unique=True)
    phone_number = models.CharField(
        max_length=20,
        unique=True,
        help_text="Unique phone number for the user.",
    )
    push_token = models.CharField(
        max_length=255,
        blank=True,
        null=True,
        help_text="Optional device token used for push notifications.",
    )

    REQUIRED_FIELDS = ["email", "phone_number"]

    def __str__(self) -> str:
        return f"({self.id}) {self.email}"


class AdminAccount(models.Model):
    """Administrator identity with its own credentials and tokens."""

    email = models.EmailField(unique=True)
    password = models.CharField(max_length=128)
    created_at = models.DateTimeField(auto_now_add=True)

    # DRF permission classes inspect these on request.user.
    is_active = True
    is_anonymous = False

    class Meta:
        ordering = ["email"]

    def __str__(self) -> str:
        return self.email

    @property
    def is_authenticated(self) -> bool:
        return True

    def set_password(self, raw_password: str) -> None:
        self.password = make_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return check_password(raw_password, self.password)
