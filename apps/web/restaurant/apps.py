"""Django app configuration for the ordering and catalog module."""

from django.apps import AppConfig


class RestaurantConfig(AppConfig):
    """Tables, menu, orders and stock."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.restaurant"
    verbose_name = "Menu & Orders"
