"""Storefront UI model: locators, catalogs and expected state machines.

Action Helpers live in `conformance.ui.actions` and Assertion
Specifications in `conformance.ui.assertions`.
"""

from conformance.ui.catalog import Credentials, Product, ScenarioUser
from conformance.ui.locators import Locator, PageTitle, ProductControl, Route
from conformance.ui.state_machine import (
    CheckoutForm,
    CheckoutProgress,
    CheckoutState,
    LoginOutcome,
    LoginState,
    expected_login_outcome,
)


__all__ = [
    "CheckoutForm",
    "CheckoutProgress",
    "CheckoutState",
    "Credentials",
    "Locator",
    "LoginOutcome",
    "LoginState",
    "PageTitle",
    "Product",
    "ProductControl",
    "Route",
    "ScenarioUser",
    "expected_login_outcome",
]
