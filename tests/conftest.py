"""
Shared fixtures for django-auradawn tests.
"""
from unittest.mock import MagicMock

import pytest
from django.contrib.auth import get_user_model

from auradawn.models import Category, Post

User = get_user_model()


@pytest.fixture
def user(db):
    """Create a signed-up, non-staff user."""
    return User.objects.create_user(
        username="reader",
        email="reader@example.com",
        password="testpass123",
    )


@pytest.fixture
def staff_user(db):
    """Create a staff user."""
    return User.objects.create_user(
        username="author",
        email="author@example.com",
        password="testpass123",
        first_name="Aura",
        is_staff=True,
    )


@pytest.fixture
def staff_client(client, staff_user):
    client.force_login(staff_user)
    return client


@pytest.fixture
def category(db):
    return Category.objects.create(name="Reading", slug="reading")


@pytest.fixture
def post(db, staff_user, category):
    """A published post with a media card in its body."""
    return Post.objects.create(
        title="Test Post",
        slug="test-post",
        content="# Notes\n\n> [!BOOK] Dune\n> rating: 4.5\n",
        excerpt="A test post",
        published=True,
        author=staff_user,
        category=category,
    )


@pytest.fixture
def draft(db, staff_user):
    return Post.objects.create(
        title="Draft Post",
        slug="draft-post",
        content="Work in progress",
        published=False,
        author=staff_user,
    )


@pytest.fixture
def s3_client(monkeypatch):
    """Replace the boto3 client used by auradawn.storage with a MagicMock."""
    client = MagicMock()
    monkeypatch.setattr("auradawn.storage.get_s3_client", lambda: client)
    return client
