"""Action Helpers: one user-facing action per call.

Helpers never assert on the outcome of what they do; the caller checks
consequences with the Assertion Specifications in `conformance.ui.assertions`.
"""

import structlog

from conformance.session.ui import UiSession
from conformance.ui.catalog import DEFAULT_PASSWORD, Product, ScenarioUser
from conformance.ui.locators import Locator, ProductControl, Route
from conformance.ui.state_machine import CheckoutForm


logger = structlog.get_logger()


def authenticate(
    session: UiSession, username: str, password: str = DEFAULT_PASSWORD
) -> None:
    """Submit the login form from a fresh load of the origin root.

    Args:
        session: UI session to act on.
        username: Value for the username field.
        password: Value for the password field.
    """
    logger.info("ui_action", component="ui", action="authenticate", username=username)
    session.goto(Route.LOGIN)
    session.fill(Locator.USERNAME_INPUT, username)
    session.fill(Locator.PASSWORD_INPUT, password)
    session.click(Locator.LOGIN_BUTTON)


def login_as(session: UiSession, user: ScenarioUser) -> None:
    """Authenticate with a catalog user's credentials."""
    authenticate(session, user.credentials.username, user.credentials.password)


def add_to_cart(session: UiSession, product: Product) -> None:
    """Click a product's add-to-cart control."""
    logger.info(
        "ui_action", component="ui", action="add_to_cart", product=product.product_id
    )
    session.click_product_control(ProductControl.ADD_TO_CART, product)


def remove_from_cart(session: UiSession, product: Product) -> None:
    """Click a product's remove control (inventory or cart page)."""
    logger.info(
        "ui_action",
        component="ui",
        action="remove_from_cart",
        product=product.product_id,
    )
    session.click_product_control(ProductControl.REMOVE, product)


def open_cart(session: UiSession) -> None:
    session.click(Locator.CART_LINK)


def begin_checkout(session: UiSession) -> None:
    session.click(Locator.CHECKOUT_BUTTON)


def fill_checkout_form(session: UiSession, form: CheckoutForm) -> None:
    """Type the provided checkout fields; missing ones are left untouched."""
    fields = (
        (Locator.FIRST_NAME_INPUT, form.first_name),
        (Locator.LAST_NAME_INPUT, form.last_name),
        (Locator.POSTAL_CODE_INPUT, form.postal_code),
    )
    for key, value in fields:
        if value is not None:
            session.fill(key, value)


def continue_checkout(session: UiSession) -> None:
    session.click(Locator.CONTINUE_BUTTON)
