"""Storefront Flow Scenarios.

Each builder returns an unrun FlowScenario whose steps start from a fresh
tab: preconditions (log in, fill the cart, reach checkout) are steps of
the scenario itself.
"""

from conformance.scenarios.runner import FlowScenario
from conformance.session.ui import UiSession
from conformance.ui.actions import (
    add_to_cart,
    begin_checkout,
    continue_checkout,
    fill_checkout_form,
    login_as,
    open_cart,
    remove_from_cart,
)
from conformance.ui.assertions import (
    expect_authenticated,
    expect_cart_contents,
    expect_cart_count,
    expect_checkout_state,
    expect_login_outcome,
    expect_on_page,
    expect_title,
)
from conformance.ui.catalog import Product, ScenarioUser
from conformance.ui.locators import PageTitle, Route
from conformance.ui.state_machine import (
    CheckoutForm,
    CheckoutProgress,
    CheckoutState,
    expected_login_outcome,
)


DEFAULT_CHECKOUT_FORM = CheckoutForm("Teste", "User", "12345")


def login_flow(session: UiSession, user: ScenarioUser) -> FlowScenario:
    """Log in as a catalog user and check the expected outcome."""
    outcome = expected_login_outcome(user)
    return (
        FlowScenario(f"login_{user.name.lower()}")
        .step("authenticate", login_as, session, user)
        .step(f"expect_{outcome.state.value}", expect_login_outcome, session, outcome)
    )


def authenticated_precondition(session: UiSession) -> FlowScenario:
    """Standard user logged in and the inventory heading shown."""
    return (
        FlowScenario("authenticated")
        .step("authenticate", login_as, session, ScenarioUser.STANDARD)
        .step("expect_products_title", expect_title, session, PageTitle.INVENTORY)
    )


def cart_round_trip_flow(session: UiSession) -> FlowScenario:
    """Add three products, check the cart, remove two, check the rest.

    Adds the backpack, bike light and bolt t-shirt, expects a badge of 3
    and three cart rows, removes the first and third from the cart page,
    then expects a badge of 1 with only the bike light left.
    """
    added = [Product.BACKPACK, Product.BIKE_LIGHT, Product.BOLT_T_SHIRT]
    removed = [Product.BACKPACK, Product.BOLT_T_SHIRT]
    remaining = [p for p in added if p not in removed]

    scenario = FlowScenario("cart_round_trip").extend(
        authenticated_precondition(session)
    )
    for product in added:
        scenario.step(f"add_{product.product_id}", add_to_cart, session, product)
    scenario.step("expect_badge_3", expect_cart_count, session, len(added))
    scenario.step("open_cart", open_cart, session)
    scenario.step("expect_cart_page", expect_on_page, session, Route.CART)
    scenario.step("expect_three_rows", expect_cart_contents, session, added)
    for product in removed:
        scenario.step(
            f"remove_{product.product_id}", remove_from_cart, session, product
        )
    scenario.step("expect_badge_1", expect_cart_count, session, len(remaining))
    scenario.step(
        "expect_remaining_rows", expect_cart_contents, session, remaining, removed
    )
    return scenario


def cart_counter_flow(
    session: UiSession,
    first: Product = Product.ONESIE,
    second: Product = Product.FLEECE_JACKET,
) -> FlowScenario:
    """Badge tracks each add and remove, and disappears at zero.

    Adds `first` then `second`, removes them in the same order, and
    checks the badge after each move: hidden, 1, 2, 1, hidden.

    Raises:
        ValueError: If both products are the same.
    """
    if first is second:
        raise ValueError(f"Cart counter needs two distinct products: {first.name}")

    scenario = FlowScenario("cart_counter").extend(authenticated_precondition(session))
    moves = [
        ("add", first, 1),
        ("add", second, 2),
        ("remove", first, 1),
        ("remove", second, 0),
    ]

    scenario.step("expect_empty_badge", expect_cart_count, session, 0)
    for verb, product, count in moves:
        action = add_to_cart if verb == "add" else remove_from_cart
        scenario.step(f"{verb}_{product.product_id}", action, session, product)
        scenario.step(
            f"expect_badge_after_{verb}_{product.product_id}",
            expect_cart_count,
            session,
            count,
        )
    return scenario


def checkout_precondition(session: UiSession, product: Product) -> FlowScenario:
    """Standard user with one product in the cart, on checkout step one."""
    return (
        FlowScenario("checkout_step_one")
        .step("authenticate", login_as, session, ScenarioUser.STANDARD)
        .step("expect_authenticated", expect_authenticated, session)
        .step(f"add_{product.product_id}", add_to_cart, session, product)
        .step("open_cart", open_cart, session)
        .step("expect_cart_page", expect_on_page, session, Route.CART)
        .step("begin_checkout", begin_checkout, session)
        .step("expect_step_one", expect_on_page, session, Route.CHECKOUT_STEP_ONE)
    )


def checkout_validation_flow(
    session: UiSession,
    product: Product = Product.BACKPACK,
    form: CheckoutForm = DEFAULT_CHECKOUT_FORM,
) -> FlowScenario:
    """Walk the checkout field checks one field at a time.

    Presses Continue with an empty form, then after adding the first name,
    then the last name, then the postal code. Each press must show only
    the error of the first missing field; the last one reaches the
    overview listing the product.

    Raises:
        ValueError: If `form` leaves a field empty.
    """
    if form.expected_state() is not CheckoutState.READY_FOR_OVERVIEW:
        raise ValueError(f"Checkout walk needs every field filled: {form}")

    stages = [
        CheckoutForm(),
        CheckoutForm(form.first_name),
        CheckoutForm(form.first_name, form.last_name),
        form,
    ]
    progress = CheckoutProgress()
    scenario = FlowScenario("checkout_validation").extend(
        checkout_precondition(session, product)
    )
    for stage in stages:
        state = stage.expected_state()
        scenario.step(f"submit_for_{state.value}", _submit_checkout, session, stage)
        scenario.step(
            f"expect_{state.value}",
            _observe_checkout,
            session,
            progress,
            state,
            product,
        )
    return scenario


def _submit_checkout(session: UiSession, form: CheckoutForm) -> None:
    fill_checkout_form(session, form)
    continue_checkout(session)


def _observe_checkout(
    session: UiSession,
    progress: CheckoutProgress,
    state: CheckoutState,
    product: Product,
) -> None:
    progress.transition(state)
    expect_checkout_state(session, state, product)
