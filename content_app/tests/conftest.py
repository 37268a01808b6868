import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from content_app.models import Category, Series, Video
from users_app.models import AdminAccount


# -----------------------------------------------------------------------------------
# DRF API clients (anonymous, viewer, admin)
# -----------------------------------------------------------------------------------
@pytest.fixture
def api():
    """Unauthenticated DRF API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Simple registered viewer."""
    User = get_user_model()
    return User.objects.create_user(
        username="tester@example.com",
        email="tester@example.com",
        password="pass1234",
        name="Tester",
        phone_number="+200000001",
    )


@pytest.fixture
def other_user(db):
    User = get_user_model()
    return User.objects.create_user(
        username="other@example.com",
        email="other@example.com",
        password="pass1234",
        name="Other",
        phone_number="+200000002",
    )


@pytest.fixture
def auth_api(user):
    """Client authenticated as a viewer."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin(db):
    admin = AdminAccount(email="admin@example.com")
    admin.set_password("admin-pass")
    admin.save()
    return admin


@pytest.fixture
def admin_api(admin):
    """Client authenticated as a content admin."""
    client = APIClient()
    client.force_authenticate(user=admin)
    return client


# -----------------------------------------------------------------------------------
# Content graph: Movies (root) → Action, plus a series
# -----------------------------------------------------------------------------------
@pytest.fixture
def movies(db):
    return Category.objects.create(name="Movies")


@pytest.fixture
def action(movies):
    return Category.objects.create(name="Action", parent=movies)


@pytest.fixture
def series(db):
    return Series.objects.create(title="Space Saga")


@pytest.fixture
def sample_video(action):
    """Minimal valid Video attached to a subcategory."""
    return Video.objects.create(
        title="Test Video",
        url="https://cdn.example.com/test.mp4",
        category=action,
    )
