"""Assertion Specifications for the storefront UI.

Each check reads live page state through Playwright's `expect`, which
retries until the configured expect timeout while an element is still
appearing. A check that is still unmet after that is a logical mismatch
and raises AssertionMismatchError. No check mutates the page.
"""

import re
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from playwright.sync_api import expect

from conformance.session.errors import AssertionMismatchError
from conformance.session.ui import UiSession
from conformance.ui.catalog import Product
from conformance.ui.locators import Locator, PageTitle, Route
from conformance.ui.state_machine import (
    CHECKOUT_ERRORS,
    CheckoutState,
    LoginOutcome,
    LoginState,
)


@contextmanager
def _checking(assertion: str, **details: object) -> Iterator[None]:
    """Re-raise Playwright assertion failures as AssertionMismatchError."""
    try:
        yield
    except AssertionMismatchError:
        raise
    except AssertionError as e:
        raise AssertionMismatchError(
            f"{assertion} failed: {e}", assertion=assertion, details=details
        ) from e


def route_pattern(route: Route) -> re.Pattern[str]:
    """URL pattern matching a route on any origin, ignoring the query."""
    return re.compile(re.escape(route.value) + r"(\?.*)?$")


def expected_badge_text(count: int) -> str | None:
    """Text the cart badge shows for a count; None means no badge.

    Raises:
        ValueError: If count is negative.
    """
    if count < 0:
        raise ValueError(f"Cart count cannot be negative: {count}")
    return str(count) if count else None


def expect_on_page(session: UiSession, route: Route) -> None:
    with _checking("on_page", route=route.value):
        expect(session.page).to_have_url(route_pattern(route))


def expect_not_on_page(session: UiSession, route: Route) -> None:
    with _checking("not_on_page", route=route.value):
        expect(session.page).not_to_have_url(route_pattern(route))


def expect_title(session: UiSession, title: PageTitle) -> None:
    heading = session.element(Locator.PAGE_TITLE).get_by_text(title.value)
    with _checking("title", title=title.value):
        expect(heading).to_be_visible()


def expect_authenticated(session: UiSession) -> None:
    """Inventory is shown: path, Products heading and cart link."""
    expect_on_page(session, Route.INVENTORY)
    expect_title(session, PageTitle.INVENTORY)
    with _checking("cart_link_visible"):
        expect(session.element(Locator.CART_LINK)).to_be_visible()


def expect_login_error(session: UiSession, message: str) -> None:
    """Error banner shows the literal and the inventory was not reached.

    Args:
        session: UI session to inspect.
        message: Exact error literal the banner must contain.
    """
    banner = session.element(Locator.ERROR_BANNER)
    with _checking("login_error", message=message):
        expect(banner).to_be_visible()
        expect(banner).to_contain_text(message)
    expect_not_on_page(session, Route.INVENTORY)
    expect_on_page(session, Route.LOGIN)


def expect_login_outcome(session: UiSession, outcome: LoginOutcome) -> None:
    """Check the page against an expected login outcome.

    Raises:
        ValueError: If the outcome is not a post-submit state.
    """
    if outcome.state is LoginState.AUTHENTICATED_AT_INVENTORY:
        expect_authenticated(session)
    elif outcome.state is LoginState.LOGIN_ERROR and outcome.message:
        expect_login_error(session, outcome.message)
    else:
        raise ValueError(f"Not a login submission outcome: {outcome}")


def expect_cart_count(session: UiSession, count: int) -> None:
    """Cart badge shows exactly `count`, or is absent when zero."""
    badge = session.element(Locator.CART_BADGE)
    text = expected_badge_text(count)
    with _checking("cart_count", expected=count):
        if text is None:
            expect(badge).not_to_be_visible()
        else:
            expect(badge).to_be_visible()
            expect(badge).to_have_text(text)


def expect_cart_contents(
    session: UiSession,
    present: Iterable[Product],
    absent: Iterable[Product] = (),
) -> None:
    """Cart page lists exactly the present products and none of the absent.

    Args:
        session: UI session on the cart page.
        present: Products that must each have a visible row.
        absent: Products that must not have a visible row.
    """
    present = list(present)
    absent = list(absent)
    with _checking(
        "cart_contents",
        present=[p.product_id for p in present],
        absent=[p.product_id for p in absent],
    ):
        expect(session.element(Locator.CART_ITEM)).to_have_count(len(present))
        for product in present:
            expect(session.cart_row(product)).to_be_visible()
        for product in absent:
            expect(session.cart_row(product)).not_to_be_visible()


def expect_checkout_state(
    session: UiSession, state: CheckoutState, product: Product | None = None
) -> None:
    """Check the checkout page against one state of the checkout machine.

    Args:
        session: UI session on the checkout flow.
        state: Expected checkout state.
        product: For READY_FOR_OVERVIEW, an item that must be listed.
    """
    if state is CheckoutState.READY_FOR_OVERVIEW:
        expect_on_page(session, Route.CHECKOUT_STEP_TWO)
        expect_title(session, PageTitle.CHECKOUT_OVERVIEW)
        if product is not None:
            item = session.element(Locator.ITEM_NAME).filter(
                has_text=product.display_name
            )
            with _checking("overview_item", product=product.product_id):
                expect(item).to_be_visible()
        return

    message = CHECKOUT_ERRORS[state]
    banner = session.element(Locator.ERROR_BANNER)
    with _checking("checkout_error", state=state.value, message=message):
        expect(banner).to_be_visible()
        expect(banner).to_contain_text(message)
    expect_on_page(session, Route.CHECKOUT_STEP_ONE)
