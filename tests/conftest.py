"""Test configuration and fixtures."""

import logfire
import pytest
from fastapi.testclient import TestClient

from portal.adapter.supabase import MockSupabaseIdentityProvider
from portal.interface.api.app import create_app
from tests.di import build_test_container

# Instrumentation in create_app needs a configured Logfire; keep it local
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def client():
    """Test client over an app wired to mocks.

    Each test gets its own container, so in-memory data never leaks
    between tests.
    """
    app = create_app(build_test_container())
    return TestClient(app)


@pytest.fixture
def access_token() -> str:
    """Identity provider access token for the seeded mock user."""
    return f"mock-access-{MockSupabaseIdentityProvider.MOCK_USER_ID}"
