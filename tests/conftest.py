"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("LOG_FORMAT", "text")

from src.services.listing_search import ListingSearchService
from tests.fixtures.listings import build_tables
from tests.utils.helpers import InMemoryClient


@pytest.fixture
def listing_tables():
    """Fresh copy of the fixture tables."""
    return build_tables()


@pytest.fixture
def in_memory_client(listing_tables):
    """Supabase stand-in evaluating queries over the fixture tables."""
    return InMemoryClient(listing_tables)


@pytest.fixture
def listing_service(in_memory_client):
    """ListingSearchService bound to the in-memory client."""
    return ListingSearchService(client=in_memory_client)


@pytest.fixture
def reset_supabase_singleton():
    """Clear the cached Supabase client around a test."""
    import src.services.supabase_client as supabase_client

    supabase_client._client = None
    yield
    supabase_client._client = None


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time
