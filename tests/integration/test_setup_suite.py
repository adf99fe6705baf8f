"""
Suite setup/teardown integration tests.

Verifies:
- A fresh account is registered and logged in once
- The bearer token reaches later requests
- Setup failures abort with FixtureSetupError
- Teardown closes the client exactly once
"""
from unittest.mock import patch

import httpx
import pytest
from fastapi.testclient import TestClient

from storyspoil.config import SuiteConfig
from storyspoil.context import generate_username, setup_suite, teardown_suite
from storyspoil.errors import FixtureSetupError
from tests.fake_service import create_app

FAKE_BASE_URL = "http://testserver/api"


class TestSetupSuite:
    """Test the authenticated context produced by setup_suite."""

    def test_registers_user_and_binds_token(self, suite_context, service_app):
        assert suite_context.username in service_app.state.users
        assert suite_context.token in service_app.state.tokens
        assert suite_context.client.token == suite_context.token
        assert suite_context.story_id is None

    def test_token_authorises_story_calls(self, suite_context):
        result = suite_context.client.list_stories()
        assert result.status_code == 200

    def test_unauthenticated_client_is_rejected(self, api_client):
        assert api_client.list_stories().status_code == 401

    def test_each_setup_uses_a_new_account(self, suite_config, service_app):
        first = setup_suite(suite_config, http_client=TestClient(service_app, base_url=FAKE_BASE_URL))
        second = setup_suite(suite_config, http_client=TestClient(service_app, base_url=FAKE_BASE_URL))
        try:
            assert first.username != second.username
            assert first.token != second.token
        finally:
            teardown_suite(first)
            teardown_suite(second)

    def test_login_failure_is_fatal(self, suite_config):
        app = create_app(login_enabled=False)

        with pytest.raises(FixtureSetupError, match="Login should return 200"):
            setup_suite(suite_config, http_client=TestClient(app, base_url=FAKE_BASE_URL))

    def test_empty_token_is_fatal(self, suite_config):
        app = create_app(issue_empty_token=True)

        with pytest.raises(FixtureSetupError, match="accessToken"):
            setup_suite(suite_config, http_client=TestClient(app, base_url=FAKE_BASE_URL))

    def test_unreachable_service_is_fatal(self, suite_config):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = httpx.Client(base_url=FAKE_BASE_URL, transport=httpx.MockTransport(refuse))

        with pytest.raises(FixtureSetupError, match="Could not reach"):
            setup_suite(suite_config, http_client=transport)
        assert transport.is_closed

    def test_failed_setup_closes_client(self, suite_config):
        http = TestClient(create_app(login_enabled=False), base_url=FAKE_BASE_URL)

        with patch.object(http, "close", wraps=http.close) as close:
            with pytest.raises(FixtureSetupError):
                setup_suite(suite_config, http_client=http)

        close.assert_called_once()


class TestTeardownSuite:

    def test_closes_client_once(self, suite_config, http_client):
        ctx = setup_suite(suite_config, http_client=http_client)

        with patch.object(http_client, "close", wraps=http_client.close) as close:
            teardown_suite(ctx)
            teardown_suite(ctx)

        assert ctx.client.closed
        close.assert_called_once()

    def test_tolerates_missing_context(self):
        teardown_suite(None)


class TestGenerateUsername:

    def test_prefix_and_length(self):
        username = generate_username("qa_")

        assert username.startswith("qa_")
        assert len(username) == 15

    def test_unique(self):
        assert len({generate_username() for _ in range(50)}) == 50

    def test_custom_prefix(self):
        config = SuiteConfig(base_url=FAKE_BASE_URL, username_prefix="ci_")
        assert generate_username(config.username_prefix).startswith("ci_")
