"""
users_app.apps — App configuration for the VOD identity module

Creates the process-wide session service when the app registry loads and
imports signal handlers.
"""

from django.apps import AppConfig


class UsersAppConfig(AppConfig):
    """
    Configuration class for the users_app.

    Attributes:
        session_service: SessionService built from SESSION_STORE_CLASS.
            Starts empty on every process start.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "users_app"

    def ready(self):
        """Build the session registry and register signal handlers."""
        from . import signals
        from .sessions import build_session_service

        self.session_service = build_session_service()
