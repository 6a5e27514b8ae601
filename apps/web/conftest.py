"""
Pytest configuration for Django app tests.
"""

from django.test import Client as DjangoClient

import pytest

from apps.web.core.models import User


@pytest.fixture
def user() -> User:
    """Create a test customer."""
    return User.objects.create_user(
        username="testuser",
        email="testuser@example.com",
        password="testpass123",
        first_name="Test",
        last_name="User",
    )


@pytest.fixture
def staff_user() -> User:
    """Create a cashier who manages stock."""
    return User.objects.create_user(
        username="cashier",
        email="cashier@example.com",
        password="testpass123",
        role=User.Role.CASHIER,
        is_staff=True,
    )


@pytest.fixture
def api_client() -> DjangoClient:
    """Django test client for API requests."""
    return DjangoClient()


@pytest.fixture
def logged_in_client(api_client: DjangoClient, user: User) -> DjangoClient:
    """Test client with the customer logged in."""
    api_client.force_login(user)
    return api_client
