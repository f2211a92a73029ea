"""Shared pytest fixtures and configuration."""

import os
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("RESEND_API_KEY", "re_test_key_0000000000000000")
os.environ.setdefault("LOG_FORMAT", "text")

from sharpchoice.services import supabase_client  # noqa: E402
from tests.utils.fake_supabase import FakeSupabase  # noqa: E402

VALID_TOKEN = "valid-token"
ADMIN_USER = {"id": "8a4c7f9e-admin", "email": "admin@sharpchoicerealestate.com"}


@pytest.fixture
def fake_supabase(monkeypatch):
    """In-memory Supabase installed as the client singleton."""
    fake = FakeSupabase()

    def get_user(token):
        if token == VALID_TOKEN:
            return SimpleNamespace(user=dict(ADMIN_USER))
        raise Exception("invalid JWT: unable to parse or verify signature")

    fake.auth = Mock()
    fake.auth.get_user = Mock(side_effect=get_user)

    bucket = Mock()
    bucket.upload = Mock(return_value=None)
    bucket.get_public_url = Mock(
        side_effect=lambda name: f"https://test.supabase.co/storage/v1/object/public/listings-images/{name}"
    )
    fake.storage = Mock()
    fake.storage.from_ = Mock(return_value=bucket)
    fake.bucket = bucket

    monkeypatch.setattr(supabase_client, "_client", fake)
    yield fake
    supabase_client.reset_supabase_client()


@pytest.fixture
def mock_send_email(monkeypatch):
    """Replace Resend delivery used by the contact pipeline."""
    sender = AsyncMock(return_value="email_123")
    monkeypatch.setattr("sharpchoice.services.submissions.send_email", sender)
    return sender


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client for testing."""
    client = Mock()
    client.table = Mock(return_value=Mock())
    return client


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2025-06-01 12:00:00") as frozen_time:
        yield frozen_time


@pytest.fixture
def sample_reviews():
    """Seven reviews, newest first, as returned by GET /api/reviews."""
    return [
        {
            "id": 7 - i,
            "author_name": f"Client {7 - i}",
            "comment": f"Review number {7 - i}",
            "rating": (7 - i) % 6,
            "created_at": f"2025-01-0{7 - i}T10:00:00+00:00",
        }
        for i in range(7)
    ]
