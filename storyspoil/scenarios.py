"""The ordered StorySpoil scenarios and the driver that runs them.

Scenarios depend on each other: create stores the story id, edit and
delete reuse it. The order lives in ``SCENARIOS``; ``run_scenarios`` walks
it with a single ``SuiteContext`` and records one result per scenario.
"""
import logging
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional

from .client import ApiResult
from .config import SuiteConfig
from .context import SuiteContext, setup_suite, teardown_suite
from .errors import ScenarioFailed, ScenarioSkipped
from .models import StoryPayload
from .validator import extract_message, parse_json_array, parse_response

logger = logging.getLogger(__name__)

CREATED_MESSAGE = "Successfully created"
EDITED_MESSAGE = "Successfully edited"
DELETED_MESSAGE = "Deleted successfully"
# The service's wording for missing stories is not stable; any of these is accepted.
MISSING_EDIT_MESSAGES = ("No spoilers", "Unable")
MISSING_DELETE_MESSAGES = ("Unable to delete this story spoiler", "No spoilers")


class Outcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Scenario:
    order: int
    name: str
    run: Callable[[SuiteContext], None]
    description: str = ""


@dataclass
class ScenarioResult:
    order: int
    name: str
    outcome: Outcome
    message: str = ""
    elapsed: float = 0.0


@dataclass
class SuiteReport:
    results: List[ScenarioResult] = field(default_factory=list)

    def by_name(self, name: str) -> ScenarioResult:
        for result in self.results:
            if result.name == name:
                return result
        raise KeyError(name)

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    @property
    def ok(self) -> bool:
        return self.count(Outcome.FAILED) == 0


# === Checks ===

def expect_status(result: ApiResult, expected: int, label: str) -> None:
    if result.status_code != expected:
        raise ScenarioFailed(
            f"Expected {expected} {label}, got {result.status_code}: {result.body[:200]}"
        )


def expect_message(message: Optional[str], *needles: str) -> None:
    """Message must contain one of ``needles`` (case-insensitive)."""
    text = message or ""
    if not any(needle.lower() in text.lower() for needle in needles):
        wanted = " or ".join(repr(n) for n in needles)
        raise ScenarioFailed(f"Expected message containing {wanted}, got {text!r}")


def check_optional_message(result: ApiResult, needles: Iterable[str], action: str) -> None:
    """Best-effort message check; an empty body is only a warning."""
    message = extract_message(result.body)
    if message:
        expect_message(message, *needles)
    else:
        logger.warning("Empty response body for non-existing %s", action)


def require_story(ctx: SuiteContext) -> str:
    if not ctx.has_story:
        raise ScenarioSkipped("StoryId must be created in previous test.")
    return ctx.story_id


# === Scenarios ===

def create_story(ctx: SuiteContext) -> None:
    story = StoryPayload(
        title=f"Test Story {uuid.uuid4().hex[:8]}",
        description="Auto-created by tests",
        url=None,
    )
    result = ctx.client.create_story(story)
    expect_status(result, 201, "Created")

    data = parse_response(result.body)
    if data is None:
        raise ScenarioFailed(f"Could not parse create response: {result.body[:200]!r}")
    if not data.story_id:
        raise ScenarioFailed("StoryId should be returned.")
    expect_message(data.message, CREATED_MESSAGE)

    ctx.story_id = data.story_id
    logger.info("Created StoryId: %s", ctx.story_id)


def edit_story(ctx: SuiteContext) -> None:
    story_id = require_story(ctx)
    edited = StoryPayload(title="Edited Title", description="Edited Description", url="")
    result = ctx.client.edit_story(story_id, edited)
    expect_status(result, 200, "OK")

    data = parse_response(result.body)
    expect_message(data.message if data else None, EDITED_MESSAGE)


def list_stories(ctx: SuiteContext) -> None:
    result = ctx.client.list_stories()
    expect_status(result, 200, "OK")

    stories = parse_json_array(result.body)
    if stories is None:
        raise ScenarioFailed("Response must be an array.")
    if not stories:
        raise ScenarioFailed("Array should not be empty.")


def delete_story(ctx: SuiteContext) -> None:
    story_id = require_story(ctx)
    result = ctx.client.delete_story(story_id)
    expect_status(result, 200, "OK")

    data = parse_response(result.body)
    expect_message(data.message if data else None, DELETED_MESSAGE)


def create_story_without_fields(ctx: SuiteContext) -> None:
    result = ctx.client.create_story(None)
    expect_status(result, 400, "BadRequest")


def edit_missing_story(ctx: SuiteContext) -> None:
    missing_id = str(uuid.uuid4())
    result = ctx.client.edit_story(missing_id, StoryPayload(title="X", description="Y"))
    expect_status(result, 400, "BadRequest")
    check_optional_message(result, MISSING_EDIT_MESSAGES, "Edit")


def delete_missing_story(ctx: SuiteContext) -> None:
    missing_id = str(uuid.uuid4())
    result = ctx.client.delete_story(missing_id)
    expect_status(result, 400, "BadRequest")
    check_optional_message(result, MISSING_DELETE_MESSAGES, "Delete")


SCENARIOS = [
    Scenario(1, "create_story", create_story,
             "Create with required fields returns 201 and a story id"),
    Scenario(2, "edit_story", edit_story,
             "Edit the created story returns 200 and a success message"),
    Scenario(3, "list_stories", list_stories,
             "List all stories returns 200 and a non-empty array"),
    Scenario(4, "delete_story", delete_story,
             "Delete the created story returns 200 and a success message"),
    Scenario(5, "create_story_without_fields", create_story_without_fields,
             "Create without required fields returns 400"),
    Scenario(6, "edit_missing_story", edit_missing_story,
             "Edit a non-existing story returns 400"),
    Scenario(7, "delete_missing_story", delete_missing_story,
             "Delete a non-existing story returns 400"),
]


# === Driver ===

def _ordered(scenarios: Iterable[Scenario]) -> List[Scenario]:
    ordered = sorted(scenarios, key=lambda s: s.order)
    seen = set()
    for scenario in ordered:
        if scenario.order in seen:
            raise ValueError(f"Duplicate scenario order: {scenario.order}")
        seen.add(scenario.order)
    return ordered


def run_scenario(ctx: SuiteContext, scenario: Scenario) -> ScenarioResult:
    """Run one scenario, turning its exceptions into a result."""
    started = time.perf_counter()
    outcome, message = Outcome.PASSED, ""
    try:
        scenario.run(ctx)
    except ScenarioSkipped as e:
        outcome, message = Outcome.SKIPPED, e.reason
    except AssertionError as e:
        outcome, message = Outcome.FAILED, str(e)
    except Exception as e:
        outcome, message = Outcome.FAILED, f"{type(e).__name__}: {e}"
    elapsed = time.perf_counter() - started

    log = logger.error if outcome is Outcome.FAILED else logger.info
    log("[%d] %s: %s%s", scenario.order, scenario.name, outcome.value,
        f" ({message})" if message else "")
    return ScenarioResult(scenario.order, scenario.name, outcome, message, elapsed)


def run_scenarios(
    ctx: SuiteContext,
    scenarios: Optional[Iterable[Scenario]] = None
) -> SuiteReport:
    """Run scenarios strictly in ascending order against one context.

    A failing scenario does not stop the ones after it.
    """
    report = SuiteReport()
    for scenario in _ordered(SCENARIOS if scenarios is None else scenarios):
        report.results.append(run_scenario(ctx, scenario))
    return report


def run_suite(
    config: Optional[SuiteConfig] = None,
    scenarios: Optional[Iterable[Scenario]] = None,
    http_client=None
) -> SuiteReport:
    """Setup, run every scenario, teardown.

    Raises:
        FixtureSetupError: the account could not be created or logged in
    """
    ctx = setup_suite(config, http_client=http_client)
    try:
        return run_scenarios(ctx, scenarios)
    finally:
        teardown_suite(ctx)
