"""Django app configuration for activity log module."""

from django.apps import AppConfig


class ActivityConfig(AppConfig):
    """Activity log app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.activity"
    verbose_name = "Activity Log"
