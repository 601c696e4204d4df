"""Test configuration.

Settings are read once and cached, so the environment is prepared before
anything under ``src`` is imported.
"""

import os


os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_PUBLISHABLE_KEY", "sb_publishable_test")

from uuid import UUID  # noqa: E402

import pytest  # noqa: E402

from tests.fixtures.fake_supabase import DEFAULT_UID, FakeSupabaseClient, TickingClock  # noqa: E402


@pytest.fixture
def user_id() -> UUID:
    return UUID(DEFAULT_UID)


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()
