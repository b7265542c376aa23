"""Failure taxonomy for conformance scenarios.

Three kinds of failure are kept apart so a report can say which one
happened without matching on message text:

- AssertionMismatchError: observed state diverges from the expected state
- InteractionTimeoutError: a UI or HTTP interaction exceeded its ceiling
- FixtureLifecycleError: a Session Fixture could not be set up or was used
  after disposal
"""

from collections.abc import Mapping


class ConformanceError(Exception):
    """Base exception for all conformance suite errors."""

    def __init__(self, message: str, scenario: str | None = None) -> None:
        """Initialize conformance error.

        Args:
            message: Error message.
            scenario: Optional scenario name for context.
        """
        self.scenario = scenario
        super().__init__(message)


class AssertionMismatchError(ConformanceError, AssertionError):
    """Observed state does not match an Assertion Specification.

    Subclasses AssertionError so pytest reports it as a failed check.
    """

    def __init__(
        self,
        message: str,
        assertion: str,
        details: Mapping[str, object] | None = None,
        scenario: str | None = None,
    ) -> None:
        """Initialize assertion mismatch error.

        Args:
            message: Error message.
            assertion: Name of the assertion that failed.
            details: Expected/observed values and other context.
            scenario: Optional scenario name for context.
        """
        self.assertion = assertion
        self.details = dict(details or {})
        super().__init__(message, scenario)


class InteractionTimeoutError(ConformanceError):
    """An interaction did not complete within its configured timeout."""

    def __init__(
        self,
        operation: str,
        timeout_seconds: float | None,
        cause: str | None = None,
        scenario: str | None = None,
    ) -> None:
        """Initialize interaction timeout error.

        Args:
            operation: Interaction that timed out (e.g. "GET /api/users").
            timeout_seconds: Ceiling that was exceeded, if known.
            cause: Message of the underlying library error.
            scenario: Optional scenario name for context.
        """
        self.operation = operation
        self.timeout_seconds = timeout_seconds
        self.cause = cause
        ceiling = f" after {timeout_seconds:g}s" if timeout_seconds is not None else ""
        message = f"{operation} timed out{ceiling}"
        if cause:
            message = f"{message}: {cause}"
        super().__init__(message, scenario)


class FixtureLifecycleError(ConformanceError):
    """A Session Fixture could not be set up or was used after disposal."""

    def __init__(
        self,
        message: str,
        fixture: str,
        phase: str,
        scenario: str | None = None,
    ) -> None:
        """Initialize fixture lifecycle error.

        Args:
            message: Error message.
            fixture: Fixture name (e.g. "api_session").
            phase: "setup" or "use".
            scenario: Optional scenario name for context.
        """
        self.fixture = fixture
        self.phase = phase
        super().__init__(message, scenario)
