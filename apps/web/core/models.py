"""
Core models - Users and the shared model base.

All restaurant and activity models inherit from BaseModel.
"""

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


def generate_id() -> str:
    """Generate an opaque 32-character identifier."""
    return uuid.uuid4().hex


class User(AbstractUser):
    """
    Custom user model with a role.

    Customers place orders; admin and cashier staff manage stock.
    """

    class Role(models.TextChoices):
        ADMIN = "admin", "Admin"
        CASHIER = "cashier", "Cashier"
        KITCHEN = "kitchen", "Kitchen"
        CUSTOMER = "customer", "Customer"

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CUSTOMER,
    )

    class Meta:
        ordering = ["username"]

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class BaseModel(models.Model):
    """
    Abstract base for all domain models.

    Provides:
    - String primary key (generated when not supplied)
    - Created/updated timestamps
    """

    id = models.CharField(
        primary_key=True,
        max_length=32,
        default=generate_id,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
