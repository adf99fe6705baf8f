"""HTTP client for the StorySpoil API."""
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .config import (
    DEFAULT_TIMEOUT,
    USER_CREATE_PATH, USER_AUTH_PATH,
    STORY_CREATE_PATH, STORY_EDIT_PATH, STORY_ALL_PATH, STORY_DELETE_PATH,
)
from .models import CreateUserRequest, LoginRequest, StoryPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiResult:
    """Status code and raw body of one API call."""
    status_code: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500


class StoryApiClient:
    """Thin wrapper over ``httpx.Client`` bound to one API root.

    Every call returns an ``ApiResult``; HTTP error statuses are data, not
    exceptions. Transport failures (DNS, TLS, timeouts) propagate as
    ``httpx.HTTPError``.

    Usage:
        client = StoryApiClient("https://host/api")
        client.set_token(token)
        result = client.list_stories()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None
    ):
        self.base_url = base_url.rstrip("/")
        # An injected client (e.g. a TestClient) keeps its own base URL
        self._http = http_client or httpx.Client(base_url=self.base_url, timeout=timeout)
        self._token: Optional[str] = None
        self._closed = False

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def closed(self) -> bool:
        return self._closed

    def set_token(self, token: str) -> None:
        """Send ``Authorization: Bearer <token>`` on every later request."""
        if not token:
            raise ValueError("token must not be empty")
        self._token = token
        self._http.headers["Authorization"] = f"Bearer {token}"

    def close(self) -> None:
        """Release pooled connections. Safe to call more than once."""
        if self._closed:
            return
        self._http.close()
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # === Transport ===

    def request(self, method: str, path: str, json: Optional[dict] = None) -> ApiResult:
        if self._closed:
            raise RuntimeError("client is closed")
        logger.debug("%s %s", method, path)
        response = self._http.request(method, path, json=json)
        logger.debug("%s %s -> %s", method, path, response.status_code)
        return ApiResult(status_code=response.status_code, body=response.text)

    # === Users ===

    def create_user(self, user: CreateUserRequest) -> ApiResult:
        return self.request("POST", USER_CREATE_PATH, json=user.to_json())

    def authenticate(self, credentials: LoginRequest) -> ApiResult:
        return self.request("POST", USER_AUTH_PATH, json=credentials.to_json())

    # === Stories ===

    def create_story(self, story: Optional[StoryPayload]) -> ApiResult:
        """Create a story. ``None`` sends an empty JSON object."""
        body = story.to_json() if story is not None else {}
        return self.request("POST", STORY_CREATE_PATH, json=body)

    def edit_story(self, story_id: str, story: StoryPayload) -> ApiResult:
        path = STORY_EDIT_PATH.format(story_id=story_id)
        return self.request("PUT", path, json=story.to_json())

    def list_stories(self) -> ApiResult:
        return self.request("GET", STORY_ALL_PATH)

    def delete_story(self, story_id: str) -> ApiResult:
        return self.request("DELETE", STORY_DELETE_PATH.format(story_id=story_id))
