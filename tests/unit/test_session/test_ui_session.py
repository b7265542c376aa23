"""Unit tests for the UI Session Fixture."""

from unittest.mock import MagicMock

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from conformance.session.errors import InteractionTimeoutError
from conformance.session.ui import UiSession
from conformance.ui.catalog import Product
from conformance.ui.locators import Locator, ProductControl, Route


@pytest.fixture
def page() -> MagicMock:
    page = MagicMock()
    page.url = "https://www.saucedemo.com/inventory.html"
    return page


class TestUiSession:
    def test_path_strips_origin(self, page: MagicMock) -> None:
        assert UiSession(page).path == "/inventory.html"

    def test_path_of_origin_root(self, page: MagicMock) -> None:
        page.url = "https://www.saucedemo.com"

        assert UiSession(page).path == "/"

    def test_goto_is_relative(self, page: MagicMock) -> None:
        UiSession(page).goto(Route.CART)

        page.goto.assert_called_once_with("/cart.html")

    def test_element_resolves_named_key(self, page: MagicMock) -> None:
        UiSession(page).element(Locator.ERROR_BANNER)

        page.locator.assert_called_once_with('[data-test="error"]')

    def test_fill_and_click(self, page: MagicMock) -> None:
        session = UiSession(page)

        session.fill(Locator.USERNAME_INPUT, "standard_user")
        session.click(Locator.LOGIN_BUTTON)

        page.locator.return_value.fill.assert_called_once_with("standard_user")
        page.locator.return_value.click.assert_called_once_with()

    def test_product_control_selector(self, page: MagicMock) -> None:
        UiSession(page).click_product_control(ProductControl.REMOVE, Product.ONESIE)

        page.locator.assert_called_once_with('[data-test="remove-sauce-labs-onesie"]')

    def test_cart_row_filters_by_display_name(self, page: MagicMock) -> None:
        UiSession(page).cart_row(Product.BIKE_LIGHT)

        page.locator.assert_called_once_with(".cart_item")
        page.locator.return_value.filter.assert_called_once_with(
            has_text="Sauce Labs Bike Light"
        )

    def test_playwright_timeout_is_classified(self, page: MagicMock) -> None:
        page.locator.return_value.click.side_effect = PlaywrightTimeoutError(
            "Timeout 30000ms exceeded."
        )

        with pytest.raises(InteractionTimeoutError) as exc_info:
            UiSession(page).click(Locator.CHECKOUT_BUTTON)

        assert exc_info.value.operation == "click CHECKOUT_BUTTON"
        assert "timed out" in str(exc_info.value)

    def test_other_errors_propagate_unchanged(self, page: MagicMock) -> None:
        page.goto.side_effect = RuntimeError("browser crashed")

        with pytest.raises(RuntimeError, match="browser crashed"):
            UiSession(page).goto(Route.LOGIN)


@pytest.mark.parametrize("product", list(Product), ids=lambda p: p.name)
@pytest.mark.parametrize("control", list(ProductControl), ids=lambda c: c.name)
def test_product_controls_for_every_product(
    page: MagicMock, control: ProductControl, product: Product
) -> None:
    UiSession(page).click_product_control(control, product)

    page.locator.assert_called_once_with(
        f'[data-test="{control.value}-{product.product_id}"]'
    )
    page.locator.return_value.click.assert_called_once_with()
