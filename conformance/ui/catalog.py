"""Catalogs of scenario users and storefront products."""

from dataclasses import dataclass
from enum import Enum


DEFAULT_PASSWORD = "secret_sauce"  # noqa: S105
WRONG_PASSWORD = "wrong_password"  # noqa: S105


@dataclass(frozen=True)
class Credentials:
    """Immutable username/password pair.

    Attributes:
        username: Login name typed into the username field.
        password: Password typed into the password field.
    """

    username: str
    password: str = DEFAULT_PASSWORD

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


class ScenarioUser(Enum):
    """Fixed catalog of users exercised by the login scenarios."""

    STANDARD = Credentials("standard_user")
    LOCKED_OUT = Credentials("locked_out_user")
    INVALID_USERNAME = Credentials("incorrect_user")
    INVALID_PASSWORD = Credentials("standard_user", WRONG_PASSWORD)

    @property
    def credentials(self) -> Credentials:
        """Credentials for this catalog entry."""
        return self.value


class Product(Enum):
    """Storefront products: data-test identifier and display name."""

    BACKPACK = ("sauce-labs-backpack", "Sauce Labs Backpack")
    BIKE_LIGHT = ("sauce-labs-bike-light", "Sauce Labs Bike Light")
    BOLT_T_SHIRT = ("sauce-labs-bolt-t-shirt", "Sauce Labs Bolt T-Shirt")
    FLEECE_JACKET = ("sauce-labs-fleece-jacket", "Sauce Labs Fleece Jacket")
    ONESIE = ("sauce-labs-onesie", "Sauce Labs Onesie")
    RED_T_SHIRT = (
        "test.allthethings()-t-shirt-(red)",
        "Test.allTheThings() T-Shirt (Red)",
    )

    def __init__(self, product_id: str, display_name: str) -> None:
        self.product_id = product_id
        self.display_name = display_name

    @classmethod
    def from_id(cls, product_id: str) -> "Product":
        """Look up a product by its data-test identifier.

        Raises:
            KeyError: If no product has this identifier.
        """
        for product in cls:
            if product.product_id == product_id:
                return product
        raise KeyError(f"Unknown product id: {product_id}")
