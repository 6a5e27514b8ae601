"""
URL routing for checkout and stock API endpoints.
"""

from django.urls import path

from apps.web.restaurant import views

app_name = "restaurant"

urlpatterns = [
    path("checkout", views.checkout, name="checkout"),
    path("menu/<str:menu_item_id>/stock", views.menu_stock, name="menu_stock"),
]
