"""Django app configuration for auradawn."""
from django.apps import AppConfig


class AuraDawnConfig(AppConfig):
    """Configuration for the blog app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "auradawn"
    verbose_name = "AuraDawn Blog"
