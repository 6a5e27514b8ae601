"""
Restaurant models - Tables, categories, menu items, and orders.

Prices are whole numbers in minor currency units.
OrderItem stores a price snapshot; it is never re-read from MenuItem.
"""

from django.conf import settings
from django.db import models

from apps.web.core.models import BaseModel


class Table(BaseModel):
    """A dining table customers order to."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Category(BaseModel):
    """Menu category (e.g., Drinks, Mains, Desserts)."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class StockStatus(models.TextChoices):
    """Coarse stock level shown to staff."""

    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    GOOD = "good", "Good"


class StockAction(models.TextChoices):
    """Stock adjustment actions."""

    ADD = "add", "Added"
    SUBTRACT = "subtract", "Subtracted"
    SET = "set", "Set"


class MenuItem(BaseModel):
    """
    Individual menu item.

    Stock is only changed by checkout and stock adjustment services.
    """

    category = models.ForeignKey(
        Category,
        on_delete=models.CASCADE,
        related_name="items",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    image = models.CharField(max_length=255, blank=True)
    price = models.PositiveIntegerField(help_text="Price in minor currency units")
    stock = models.PositiveIntegerField(default=0)
    is_available = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(
                fields=["category", "is_available"],
                name="menu_item_category_avail_idx",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def stock_status(self) -> str:
        """Classify current stock against the configured thresholds."""
        if self.stock <= settings.STOCK_LOW_THRESHOLD:
            return StockStatus.LOW
        if self.stock <= settings.STOCK_MEDIUM_THRESHOLD:
            return StockStatus.MEDIUM
        return StockStatus.GOOD


class OrderStatus(models.TextChoices):
    """Kitchen lifecycle status."""

    PENDING = "pending", "Pending"
    COOKING = "cooking", "Cooking"
    READY = "ready", "Ready"
    COMPLETED = "completed", "Completed"


class PaymentStatus(models.TextChoices):
    """Payment status."""

    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"


class Order(BaseModel):
    """
    Customer order placed at a table.

    total_amount is fixed at checkout and equals the sum of item subtotals.
    """

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="orders",
    )
    table = models.ForeignKey(
        Table,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    order_status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    total_amount = models.PositiveIntegerField()
    order_time = models.DateTimeField()
    completed_time = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-order_time"]
        indexes = [
            models.Index(
                fields=["order_status", "order_time"],
                name="order_status_time_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Order {self.order_number} - {self.table}"

    @property
    def order_number(self) -> str:
        """Customer-facing reference: last 8 characters of the id."""
        return str(self.pk)[-8:].upper()


class OrderItem(BaseModel):
    """
    Line item in an order.

    price is the unit price charged at checkout.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
    )
    menu_item = models.ForeignKey(
        MenuItem,
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    price = models.PositiveIntegerField()
    quantity = models.PositiveIntegerField()
    subtotal = models.PositiveIntegerField(help_text="price * quantity")
    customization = models.TextField(null=True, blank=True)
    position = models.PositiveIntegerField(
        default=0,
        help_text="Line position in the submitted cart",
    )

    class Meta:
        ordering = ["order", "position"]

    def __str__(self) -> str:
        return f"{self.quantity}x {self.menu_item}"
