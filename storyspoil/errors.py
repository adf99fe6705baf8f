"""Suite exceptions."""


class StorySpoilError(Exception):
    """Base exception for the suite."""
    pass


class FixtureSetupError(StorySpoilError):
    """Account registration or login did not yield a usable token.

    Fatal: no scenario can run without credentials.
    """
    pass


class ScenarioFailed(StorySpoilError, AssertionError):
    """A scenario expectation did not hold."""
    pass


class ScenarioSkipped(StorySpoilError):
    """A scenario prerequisite left by an earlier scenario is missing."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
