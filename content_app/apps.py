"""
content_app.apps — App configuration for the VOD content module

Purpose:
--------
Registers the content graph: categories, series, videos, view records and
complaints.
"""

from django.apps import AppConfig


class ContentAppConfig(AppConfig):
    """
    Configuration class for the content_app.

    Attributes:
        default_auto_field (str): Default field type for model primary keys.
        name (str): The app name used by Django to register the app.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "content_app"
    verbose_name = "Content"
