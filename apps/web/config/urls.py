"""
URL configuration for Tableside.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("apps.web.restaurant.urls")),
]
