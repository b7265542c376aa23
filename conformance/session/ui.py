"""UI Session Fixture bound to a single browser tab.

The page (and its browser context) is provisioned and closed by
pytest-playwright; UiSession only adds named-locator resolution, relative
navigation and timeout classification on top of it.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from urllib.parse import urlparse

import structlog
from playwright.sync_api import Locator as PlaywrightLocator
from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from conformance.observability import bind_component
from conformance.session.errors import InteractionTimeoutError
from conformance.ui.catalog import Product
from conformance.ui.locators import Locator, ProductControl, Route


logger = structlog.get_logger()


class UiSession:
    """Live interaction handle for one simulated browser tab."""

    def __init__(self, page: Page, run_id: str | None = None) -> None:
        """Initialize the UI session.

        Args:
            page: Playwright page whose context carries the base URL.
            run_id: Optional run ID for logging.
        """
        self._page = page
        self._log = bind_component(logger, "session", run_id, session="ui")

    @property
    def page(self) -> Page:
        """Underlying Playwright page."""
        return self._page

    @property
    def path(self) -> str:
        """Path component of the current location."""
        return urlparse(self._page.url).path or "/"

    def element(self, key: Locator) -> PlaywrightLocator:
        """Resolve a named locator key on the current page."""
        return self._page.locator(key.value)

    def product_control(
        self, control: ProductControl, product: Product
    ) -> PlaywrightLocator:
        """Resolve a product-scoped cart control."""
        return self._page.locator(control.selector(product.product_id))

    def cart_row(self, product: Product) -> PlaywrightLocator:
        """Resolve the cart row showing a product."""
        return self.element(Locator.CART_ITEM).filter(has_text=product.display_name)

    def goto(self, route: Route) -> None:
        """Navigate to a route relative to the configured origin."""
        with self.interaction(f"goto {route.value}"):
            self._page.goto(route.value)

    def click(self, key: Locator) -> None:
        """Click a named element."""
        with self.interaction(f"click {key.name}"):
            self.element(key).click()

    def fill(self, key: Locator, value: str) -> None:
        """Fill a named input field."""
        with self.interaction(f"fill {key.name}"):
            self.element(key).fill(value)

    def click_product_control(self, control: ProductControl, product: Product) -> None:
        """Click a product-scoped cart control."""
        with self.interaction(f"click {control.value} {product.product_id}"):
            self.product_control(control, product).click()

    @contextmanager
    def interaction(self, operation: str) -> Iterator[None]:
        """Run one blocking interaction, classifying Playwright timeouts.

        Args:
            operation: Short description used in logs and errors.

        Raises:
            InteractionTimeoutError: If Playwright gives up waiting.
        """
        try:
            yield
        except PlaywrightTimeoutError as e:
            self._log.warning("ui_interaction_timeout", operation=operation)
            raise InteractionTimeoutError(operation, None, cause=str(e)) from e
        self._log.debug("ui_interaction_complete", operation=operation)
