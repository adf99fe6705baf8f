"""Test configuration and fixtures for the StorySpoil suite.

Offline tests run the suite against ``tests.fake_service``:
- Fresh fake service per test (no shared users or stories)
- TestClient transport injected into StoryApiClient
- Authenticated SuiteContext built by the real setup_suite
"""
import sys
from pathlib import Path
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Ensure storyspoil is importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from storyspoil.client import StoryApiClient
from storyspoil.config import SuiteConfig
from storyspoil.context import SuiteContext, setup_suite, teardown_suite
from tests.fake_service import create_app

FAKE_BASE_URL = "http://testserver/api"


@pytest.fixture(scope="function")
def service_app() -> FastAPI:
    """Fake StorySpoil service with empty state."""
    return create_app()


@pytest.fixture(scope="function")
def http_client(service_app: FastAPI) -> Generator[TestClient, None, None]:
    """httpx-compatible transport bound to the fake service's /api root."""
    client = TestClient(service_app, base_url=FAKE_BASE_URL)
    yield client
    client.close()


@pytest.fixture(scope="function")
def suite_config() -> SuiteConfig:
    return SuiteConfig(base_url=FAKE_BASE_URL, timeout=5)


@pytest.fixture(scope="function")
def api_client(http_client: TestClient) -> StoryApiClient:
    """Unauthenticated StoryApiClient talking to the fake service."""
    return StoryApiClient(FAKE_BASE_URL, http_client=http_client)


@pytest.fixture(scope="function")
def suite_context(
    suite_config: SuiteConfig,
    http_client: TestClient
) -> Generator[SuiteContext, None, None]:
    """Context produced by setup_suite: registered user, token bound.

    Usage:
        def test_something(suite_context):
            result = suite_context.client.list_stories()
            assert result.status_code == 200
    """
    ctx = setup_suite(suite_config, http_client=http_client)
    yield ctx
    teardown_suite(ctx)


@pytest.fixture(scope="function")
def created_story_id(suite_context: SuiteContext) -> str:
    """Create a story through the API and return its id."""
    from storyspoil.models import StoryPayload
    from storyspoil.validator import parse_response

    result = suite_context.client.create_story(
        StoryPayload(title="Fixture Story", description="Created by fixture")
    )
    assert result.status_code == 201, f"Create failed: {result.body}"
    return parse_response(result.body).story_id
