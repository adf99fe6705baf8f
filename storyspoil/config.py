"""Suite configuration and constants."""
import os
from dataclasses import dataclass

# Remote service
# Override with STORYSPOIL_BASE_URL, e.g. "http://localhost:5000/api"
DEFAULT_BASE_URL = "https://d3s5nxhwblsjbi.cloudfront.net/api"
BASE_URL = os.environ.get("STORYSPOIL_BASE_URL", DEFAULT_BASE_URL).rstrip("/")

# Request timeout in seconds
DEFAULT_TIMEOUT = 30.0

# Throwaway account created for every run
DEFAULT_PASSWORD = "P@ssw0rd!42"
DEFAULT_USERNAME_PREFIX = "qa_"
USERNAME_MAX_LENGTH = 15
EMAIL_DOMAIN = "mail.test"

# Endpoints (relative to BASE_URL)
USER_CREATE_PATH = "/User/Create"
USER_AUTH_PATH = "/User/Authentication"
STORY_CREATE_PATH = "/Story/Create"
STORY_EDIT_PATH = "/Story/Edit/{story_id}"
STORY_ALL_PATH = "/Story/All"
STORY_DELETE_PATH = "/Story/Delete/{story_id}"

DEFAULT_LOG_LEVEL = "INFO"


def _float_from_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class SuiteConfig:
    """Settings for one suite run."""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    password: str = DEFAULT_PASSWORD
    username_prefix: str = DEFAULT_USERNAME_PREFIX

    def __post_init__(self):
        self.base_url = self.base_url.rstrip("/")
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not self.timeout > 0:
            raise ValueError("timeout must be positive")


def get_suite_config() -> SuiteConfig:
    """Build suite configuration from environment variables.

    Environment variables:
    - STORYSPOIL_BASE_URL: API root (default: the public StorySpoil deployment)
    - STORYSPOIL_TIMEOUT: request timeout in seconds (default: 30)
    - STORYSPOIL_PASSWORD: password for the generated account
    - STORYSPOIL_USERNAME_PREFIX: prefix of the generated username (default: qa_)
    """
    return SuiteConfig(
        base_url=os.environ.get("STORYSPOIL_BASE_URL", DEFAULT_BASE_URL),
        timeout=_float_from_env("STORYSPOIL_TIMEOUT", DEFAULT_TIMEOUT),
        password=os.environ.get("STORYSPOIL_PASSWORD", DEFAULT_PASSWORD),
        username_prefix=os.environ.get(
            "STORYSPOIL_USERNAME_PREFIX", DEFAULT_USERNAME_PREFIX
        ),
    )


def get_log_level() -> str:
    """Console log level from STORYSPOIL_LOG_LEVEL, read at call time."""
    return os.environ.get("STORYSPOIL_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
