"""Admin registration for restaurant models.

Stock is read-only here; changes go through the stock API so every
adjustment is logged.
"""

from django.contrib import admin

from apps.web.restaurant.models import (
    Category,
    MenuItem,
    Order,
    OrderItem,
    Table,
)


class MenuItemInline(admin.TabularInline):
    """Inline for items within a category."""

    model = MenuItem
    extra = 0
    fields = ["name", "price", "stock", "is_available"]
    readonly_fields = ["stock"]


class OrderItemInline(admin.TabularInline):
    """Inline for items within an order."""

    model = OrderItem
    extra = 0
    fields = ["menu_item", "quantity", "price", "subtotal", "customization"]
    readonly_fields = ["menu_item", "quantity", "price", "subtotal", "customization"]
    can_delete = False


@admin.register(Table)
class TableAdmin(admin.ModelAdmin):
    """Admin for tables."""

    list_display = ["name", "description", "created_at"]
    search_fields = ["name"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    """Admin for menu categories."""

    list_display = ["name", "description"]
    search_fields = ["name"]
    inlines = [MenuItemInline]


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    """Admin for menu items."""

    list_display = ["name", "category", "price", "stock", "is_available"]
    list_filter = ["category", "is_available"]
    list_editable = ["is_available"]
    search_fields = ["name", "description"]
    readonly_fields = ["stock", "created_at", "updated_at"]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for orders."""

    list_display = [
        "order_number",
        "table",
        "customer",
        "order_status",
        "payment_status",
        "total_amount",
        "order_time",
    ]
    list_filter = ["order_status", "payment_status", "table"]
    search_fields = ["id", "customer__username", "customer__email"]
    readonly_fields = ["customer", "table", "total_amount", "order_time"]
    inlines = [OrderItemInline]
    date_hierarchy = "order_time"
