"""Suite-scoped state: the authenticated client and the current story id."""
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

import httpx

from .client import StoryApiClient
from .config import SuiteConfig, get_suite_config, USERNAME_MAX_LENGTH, EMAIL_DOMAIN
from .errors import FixtureSetupError
from .models import CreateUserRequest, LoginRequest
from .validator import parse_auth_response

logger = logging.getLogger(__name__)


@dataclass
class SuiteContext:
    """State threaded through every scenario of one run.

    ``story_id`` holds the most recently created story; scenarios that need
    it skip when it is empty.
    """
    config: SuiteConfig
    client: StoryApiClient
    username: str
    token: str
    story_id: Optional[str] = None

    @property
    def has_story(self) -> bool:
        return bool(self.story_id)


def generate_username(prefix: str = "qa_") -> str:
    """Unique throwaway username, capped at the service's length limit."""
    return f"{prefix}{uuid.uuid4().hex}"[:USERNAME_MAX_LENGTH]


def build_user(username: str, password: str) -> CreateUserRequest:
    return CreateUserRequest(
        user_name=username,
        first_name="QA",
        mid_name="",
        last_name="User",
        email=f"{username}@{EMAIL_DOMAIN}",
        password=password,
        re_password=password,
    )


def setup_suite(
    config: Optional[SuiteConfig] = None,
    http_client: Optional[httpx.Client] = None
) -> SuiteContext:
    """Register a fresh account, log in and return an authenticated context.

    Args:
        config: Suite settings (default: from environment)
        http_client: Pre-built transport, used by tests to target a fake service

    Returns:
        SuiteContext with a bearer token bound to its client

    Raises:
        FixtureSetupError: registration/login failed or no token came back
    """
    config = config or get_suite_config()
    client = StoryApiClient(config.base_url, timeout=config.timeout, http_client=http_client)

    try:
        username = generate_username(config.username_prefix)
        logger.info("Registering test user %s", username)

        # The service documents no contract for registration; login below
        # is the real check.
        created = client.create_user(build_user(username, config.password))
        logger.debug("User create returned %s", created.status_code)

        login = client.authenticate(LoginRequest(user_name=username, password=config.password))
        if login.status_code != 200:
            raise FixtureSetupError(
                f"Login should return 200 OK, got {login.status_code}: {login.body[:200]}"
            )

        auth = parse_auth_response(login.body)
        if auth is None or not auth.access_token:
            raise FixtureSetupError("Login response did not contain an accessToken")

        client.set_token(auth.access_token)
    except httpx.HTTPError as e:
        client.close()
        raise FixtureSetupError(f"Could not reach {config.base_url}: {e}") from e
    except FixtureSetupError:
        client.close()
        raise

    logger.info("Authenticated as %s", username)
    return SuiteContext(config=config, client=client, username=username, token=auth.access_token)


def teardown_suite(ctx: Optional[SuiteContext]) -> None:
    """Release the client. Idempotent; tolerates a context that never existed."""
    if ctx is None:
        return
    if not ctx.client.closed:
        ctx.client.close()
        logger.debug("HTTP client closed")
