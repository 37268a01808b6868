import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from users_app.models import AdminAccount


# --------------------------------------------------------------------------
# DRF test client
# --------------------------------------------------------------------------
@pytest.fixture
def api():
    """Provides a DRF APIClient instance for making HTTP requests in tests."""
    return APIClient()


# --------------------------------------------------------------------------
# User model fixture
# --------------------------------------------------------------------------
@pytest.fixture
def User():
    """Returns the active Django user model."""
    return get_user_model()


# --------------------------------------------------------------------------
# Identity fixtures
# --------------------------------------------------------------------------
@pytest.fixture
def user_active(db, User):
    """Registered viewer (used for login/session tests)."""
    return User.objects.create_user(
        username="active@example.com",
        email="active@example.com",
        password="pass1234",
        name="Active Viewer",
        phone_number="+100000001",
    )


@pytest.fixture
def admin_account(db):
    admin = AdminAccount(email="admin@example.com")
    admin.set_password("admin-pass")
    admin.save()
    return admin


@pytest.fixture
def registration_payload():
    return {
        "name": "New Viewer",
        "email": "New@Example.com",
        "password": "pass1234",
        "phone_number": "+100000002",
    }
