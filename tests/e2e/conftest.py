"""Session Fixtures for the live conformance scenarios."""

from collections.abc import Iterator

import pytest
from playwright.sync_api import Page, expect

from conformance.session import ApiSession, UiSession, open_api_session
from conformance.settings import AppSettings


@pytest.fixture
def ui_session(page: Page, settings: AppSettings) -> UiSession:
    """One browser tab per test; pytest-playwright closes it afterwards."""
    expect.set_options(timeout=settings.ui_expect_timeout_ms)
    return UiSession(page)


@pytest.fixture(scope="module")
def api_session(settings: AppSettings) -> Iterator[ApiSession]:
    """One request context shared by the tests of a module."""
    with open_api_session(settings) as session:
        yield session
