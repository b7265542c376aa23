"""Shared pytest configuration for the conformance suite.

pytest-playwright provides the per-test `page`, screenshots, video and
traces. This module supplies the origin, logging, the live/offline split
and the environment-driven rerun and worker policy.
"""

import pytest

from conformance.observability import configure_logging
from conformance.settings import AppSettings, get_settings
from tests.helpers.run_policy import apply_run_policy


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run live scenarios against the demo storefront and API.",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level_value, json_format=settings.log_json)
    # xdist workers inherit the options of the controlling process
    if not hasattr(config, "workerinput"):
        apply_run_policy(config.option, settings)


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark offline tests as unit and skip live ones unless enabled."""
    run_live = config.getoption("--live") or get_settings().run_live
    skip_live = pytest.mark.skip(reason="live scenario: pass --live or set RUN_LIVE")
    for item in items:
        if item.get_closest_marker("live") is None:
            item.add_marker(pytest.mark.unit)
        elif not run_live:
            item.add_marker(skip_live)


@pytest.fixture(scope="session")
def settings() -> AppSettings:
    """Settings loaded once per test session."""
    return get_settings()


@pytest.fixture(scope="session")
def base_url(settings: AppSettings) -> str:
    """Storefront origin used by pytest-playwright for relative navigation."""
    return settings.ui_base_url
