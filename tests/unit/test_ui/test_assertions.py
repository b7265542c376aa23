"""Unit tests for the UI Assertion Specifications.

Playwright's `expect` is patched so each check can be driven without a
browser; the page and locators are MagicMocks.
"""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest

from conformance.session.errors import AssertionMismatchError
from conformance.session.ui import UiSession
from conformance.ui import assertions
from conformance.ui.catalog import Product
from conformance.ui.locators import Locator, Route
from conformance.ui.state_machine import (
    CHECKOUT_ERRORS,
    LOCKED_OUT_MESSAGE,
    CheckoutState,
    LoginOutcome,
    LoginState,
)


@pytest.fixture
def page() -> MagicMock:
    return MagicMock()


@pytest.fixture
def session(page: MagicMock) -> UiSession:
    return UiSession(page)


@pytest.fixture
def expect() -> Iterator[MagicMock]:
    with patch("conformance.ui.assertions.expect") as mock_expect:
        yield mock_expect


class TestRoutePattern:
    """Tests for route_pattern."""

    def test_matches_path_on_any_origin(self) -> None:
        pattern = assertions.route_pattern(Route.INVENTORY)

        assert pattern.search("https://www.saucedemo.com/inventory.html")
        assert pattern.search("http://localhost:8080/inventory.html?x=1")

    def test_does_not_match_other_routes(self) -> None:
        pattern = assertions.route_pattern(Route.INVENTORY)

        assert not pattern.search("https://www.saucedemo.com/cart.html")

    def test_login_matches_root_only(self) -> None:
        pattern = assertions.route_pattern(Route.LOGIN)

        assert pattern.search("https://www.saucedemo.com/")
        assert not pattern.search("https://www.saucedemo.com/inventory.html")


class TestExpectedBadgeText:
    """Tests for expected_badge_text."""

    def test_zero_means_no_badge(self) -> None:
        assert assertions.expected_badge_text(0) is None

    def test_positive_count(self) -> None:
        assert assertions.expected_badge_text(3) == "3"

    def test_negative_count(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            assertions.expected_badge_text(-1)


class TestCartChecks:
    """Tests for cart count and content checks."""

    def test_zero_count_expects_absent_badge(
        self, session: UiSession, page: MagicMock, expect: MagicMock
    ) -> None:
        assertions.expect_cart_count(session, 0)

        page.locator.assert_called_with(Locator.CART_BADGE.value)
        expect.return_value.not_to_be_visible.assert_called_once_with()
        expect.return_value.to_have_text.assert_not_called()

    def test_positive_count_expects_text(
        self, session: UiSession, expect: MagicMock
    ) -> None:
        assertions.expect_cart_count(session, 2)

        expect.return_value.to_be_visible.assert_called_once_with()
        expect.return_value.to_have_text.assert_called_once_with("2")

    def test_mismatch_is_wrapped(self, session: UiSession, expect: MagicMock) -> None:
        expect.return_value.to_have_text.side_effect = AssertionError(
            "Locator expected to have text '1'"
        )

        with pytest.raises(AssertionMismatchError) as exc_info:
            assertions.expect_cart_count(session, 1)

        assert exc_info.value.assertion == "cart_count"
        assert exc_info.value.details == {"expected": 1}
        assert isinstance(exc_info.value, AssertionError)

    def test_cart_contents(
        self, session: UiSession, page: MagicMock, expect: MagicMock
    ) -> None:
        assertions.expect_cart_contents(
            session, present=[Product.BACKPACK], absent=[Product.BIKE_LIGHT]
        )

        expect.return_value.to_have_count.assert_called_once_with(1)
        page.locator.return_value.filter.assert_any_call(
            has_text="Sauce Labs Backpack"
        )
        page.locator.return_value.filter.assert_any_call(
            has_text="Sauce Labs Bike Light"
        )
        expect.return_value.not_to_be_visible.assert_called_once_with()


class TestLoginChecks:
    """Tests for login outcome checks."""

    def test_authenticated(
        self, session: UiSession, page: MagicMock, expect: MagicMock
    ) -> None:
        assertions.expect_login_outcome(
            session, LoginOutcome(LoginState.AUTHENTICATED_AT_INVENTORY)
        )

        expect.assert_any_call(page)
        page.locator.return_value.get_by_text.assert_called_once_with("Products")

    def test_login_error_checks_literal(
        self, session: UiSession, expect: MagicMock
    ) -> None:
        assertions.expect_login_outcome(
            session, LoginOutcome(LoginState.LOGIN_ERROR, LOCKED_OUT_MESSAGE)
        )

        expect.return_value.to_contain_text.assert_called_once_with(LOCKED_OUT_MESSAGE)
        expect.return_value.not_to_have_url.assert_called_once()

    def test_anonymous_is_not_an_outcome(
        self, session: UiSession, expect: MagicMock
    ) -> None:
        with pytest.raises(ValueError, match="Not a login submission outcome"):
            assertions.expect_login_outcome(
                session, LoginOutcome(LoginState.ANONYMOUS_AT_LOGIN)
            )

    def test_url_mismatch_is_wrapped(
        self, session: UiSession, expect: MagicMock
    ) -> None:
        expect.return_value.to_have_url.side_effect = AssertionError("Page URL")

        with pytest.raises(AssertionMismatchError) as exc_info:
            assertions.expect_authenticated(session)

        assert exc_info.value.assertion == "on_page"
        assert exc_info.value.details == {"route": "/inventory.html"}


class TestCheckoutChecks:
    """Tests for expect_checkout_state."""

    def test_error_state_checks_banner(
        self, session: UiSession, expect: MagicMock
    ) -> None:
        assertions.expect_checkout_state(session, CheckoutState.NEEDS_LAST_NAME)

        expect.return_value.to_contain_text.assert_called_once_with(
            CHECKOUT_ERRORS[CheckoutState.NEEDS_LAST_NAME]
        )

    def test_ready_checks_overview(
        self, session: UiSession, page: MagicMock, expect: MagicMock
    ) -> None:
        assertions.expect_checkout_state(
            session, CheckoutState.READY_FOR_OVERVIEW, Product.BACKPACK
        )

        page.locator.return_value.get_by_text.assert_called_once_with(
            "Checkout: Overview"
        )
        page.locator.return_value.filter.assert_called_once_with(
            has_text="Sauce Labs Backpack"
        )
        expect.return_value.to_contain_text.assert_not_called()
