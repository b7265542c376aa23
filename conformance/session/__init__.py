"""Session Fixtures and the failure taxonomy shared by all scenarios."""

from conformance.session.api import API_KEY_HEADER, ApiSession, open_api_session
from conformance.session.errors import (
    AssertionMismatchError,
    ConformanceError,
    FixtureLifecycleError,
    InteractionTimeoutError,
)
from conformance.session.ui import UiSession


__all__ = [
    "API_KEY_HEADER",
    "ApiSession",
    "AssertionMismatchError",
    "ConformanceError",
    "FixtureLifecycleError",
    "InteractionTimeoutError",
    "UiSession",
    "open_api_session",
]
