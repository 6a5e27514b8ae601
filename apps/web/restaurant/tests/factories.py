"""Factory classes for restaurant models."""

from django.utils import timezone

import factory

from apps.web.core.models import User
from apps.web.restaurant.models import (
    Category,
    MenuItem,
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    Table,
)


class UserFactory(factory.django.DjangoModelFactory):
    """Factory for User model."""

    class Meta:
        model = User
        django_get_or_create = ("username",)

    username = factory.Sequence(lambda n: f"user-{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    first_name = factory.Faker("first_name")
    role = User.Role.CUSTOMER
    password = factory.django.Password("testpass123")


class TableFactory(factory.django.DjangoModelFactory):
    """Factory for Table model."""

    class Meta:
        model = Table

    name = factory.Sequence(lambda n: f"Table {n}")
    description = factory.Faker("sentence")


class CategoryFactory(factory.django.DjangoModelFactory):
    """Factory for Category model."""

    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    description = factory.Faker("sentence")


class MenuItemFactory(factory.django.DjangoModelFactory):
    """Factory for MenuItem model."""

    class Meta:
        model = MenuItem

    category = factory.SubFactory(CategoryFactory)
    name = factory.Sequence(lambda n: f"Item {n}")
    description = factory.Faker("sentence")
    price = 25000
    stock = 10
    is_available = True


class OrderFactory(factory.django.DjangoModelFactory):
    """Factory for Order model."""

    class Meta:
        model = Order

    customer = factory.SubFactory(UserFactory)
    table = factory.SubFactory(TableFactory)
    order_status = OrderStatus.PENDING
    payment_status = PaymentStatus.PENDING
    total_amount = 25000
    order_time = factory.LazyFunction(timezone.now)


class OrderItemFactory(factory.django.DjangoModelFactory):
    """Factory for OrderItem model."""

    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    menu_item = factory.SubFactory(MenuItemFactory)
    quantity = 1
    price = factory.LazyAttribute(lambda obj: obj.menu_item.price)
    subtotal = factory.LazyAttribute(lambda obj: obj.price * obj.quantity)
