"""Named locator keys and routes for the storefront UI.

Every element the suite touches is addressed through an enum member, so a
mistyped key fails at import or attribute lookup rather than timing out
against a live page.
"""

from enum import Enum


class Route(str, Enum):
    """Storefront paths, relative to the configured origin."""

    LOGIN = "/"
    INVENTORY = "/inventory.html"
    CART = "/cart.html"
    CHECKOUT_STEP_ONE = "/checkout-step-one.html"
    CHECKOUT_STEP_TWO = "/checkout-step-two.html"


class Locator(str, Enum):
    """Stable selectors for storefront elements."""

    USERNAME_INPUT = '[data-test="username"]'
    PASSWORD_INPUT = '[data-test="password"]'
    LOGIN_BUTTON = '[data-test="login-button"]'
    ERROR_BANNER = '[data-test="error"]'
    PAGE_TITLE = ".title"
    CART_LINK = ".shopping_cart_link"
    CART_BADGE = ".shopping_cart_badge"
    CART_ITEM = ".cart_item"
    CHECKOUT_BUTTON = '[data-test="checkout"]'
    FIRST_NAME_INPUT = '[data-test="firstName"]'
    LAST_NAME_INPUT = '[data-test="lastName"]'
    POSTAL_CODE_INPUT = '[data-test="postalCode"]'
    CONTINUE_BUTTON = '[data-test="continue"]'
    ITEM_NAME = ".inventory_item_name"


class ProductControl(str, Enum):
    """Per-product cart controls; the value is the data-test prefix."""

    ADD_TO_CART = "add-to-cart"
    REMOVE = "remove"

    def selector(self, product_id: str) -> str:
        """Build the selector for this control on one product.

        Args:
            product_id: Product identifier as used in data-test attributes.

        Returns:
            Attribute selector string.
        """
        return f'[data-test="{self.value}-{product_id}"]'


class PageTitle(str, Enum):
    """Literal page headings rendered in the `.title` element."""

    INVENTORY = "Products"
    CHECKOUT_OVERVIEW = "Checkout: Overview"
