"""Expected state machines for the login and checkout flows.

Login:
    ANONYMOUS_AT_LOGIN -> AUTHENTICATED_AT_INVENTORY (valid credentials)
    ANONYMOUS_AT_LOGIN -> LOGIN_ERROR (locked out, wrong user or password)

Checkout step one validates its fields one at a time, in a fixed order:
    NEEDS_FIRST_NAME -> NEEDS_LAST_NAME -> NEEDS_POSTAL_CODE
    -> READY_FOR_OVERVIEW
Only the first missing field's error is ever shown, however many fields
are empty.
"""

from dataclasses import dataclass
from enum import Enum

import structlog

from conformance.observability import bind_component
from conformance.ui.catalog import ScenarioUser


logger = structlog.get_logger()


LOCKED_OUT_MESSAGE = "Epic sadface: Sorry, this user has been locked out."
CREDENTIALS_MISMATCH_MESSAGE = (
    "Epic sadface: Username and password do not match any user in this service"
)


class LoginState(Enum):
    """Observable states of the login page."""

    ANONYMOUS_AT_LOGIN = "anonymous_at_login"
    AUTHENTICATED_AT_INVENTORY = "authenticated_at_inventory"
    LOGIN_ERROR = "login_error"


@dataclass(frozen=True)
class LoginOutcome:
    """Expected result of one login attempt.

    Attributes:
        state: State the page must end up in.
        message: Exact error literal, for LOGIN_ERROR only.
    """

    state: LoginState
    message: str | None = None


_LOGIN_OUTCOMES: dict[ScenarioUser, LoginOutcome] = {
    ScenarioUser.STANDARD: LoginOutcome(LoginState.AUTHENTICATED_AT_INVENTORY),
    ScenarioUser.LOCKED_OUT: LoginOutcome(LoginState.LOGIN_ERROR, LOCKED_OUT_MESSAGE),
    ScenarioUser.INVALID_USERNAME: LoginOutcome(
        LoginState.LOGIN_ERROR, CREDENTIALS_MISMATCH_MESSAGE
    ),
    ScenarioUser.INVALID_PASSWORD: LoginOutcome(
        LoginState.LOGIN_ERROR, CREDENTIALS_MISMATCH_MESSAGE
    ),
}


def expected_login_outcome(user: ScenarioUser) -> LoginOutcome:
    """Get the expected login outcome for a catalog user."""
    return _LOGIN_OUTCOMES[user]


class CheckoutState(Enum):
    """States of the checkout information step."""

    NEEDS_FIRST_NAME = "needs_first_name"
    NEEDS_LAST_NAME = "needs_last_name"
    NEEDS_POSTAL_CODE = "needs_postal_code"
    READY_FOR_OVERVIEW = "ready_for_overview"


CHECKOUT_ORDER: tuple[CheckoutState, ...] = (
    CheckoutState.NEEDS_FIRST_NAME,
    CheckoutState.NEEDS_LAST_NAME,
    CheckoutState.NEEDS_POSTAL_CODE,
    CheckoutState.READY_FOR_OVERVIEW,
)

CHECKOUT_ERRORS: dict[CheckoutState, str] = {
    CheckoutState.NEEDS_FIRST_NAME: "Error: First Name is required",
    CheckoutState.NEEDS_LAST_NAME: "Error: Last Name is required",
    CheckoutState.NEEDS_POSTAL_CODE: "Error: Postal Code is required",
}


@dataclass(frozen=True)
class CheckoutForm:
    """Values typed into the checkout information step.

    None or an empty string both count as missing.
    """

    first_name: str | None = None
    last_name: str | None = None
    postal_code: str | None = None

    def expected_state(self) -> CheckoutState:
        """State the page must show after pressing Continue with this form."""
        if not self.first_name:
            return CheckoutState.NEEDS_FIRST_NAME
        if not self.last_name:
            return CheckoutState.NEEDS_LAST_NAME
        if not self.postal_code:
            return CheckoutState.NEEDS_POSTAL_CODE
        return CheckoutState.READY_FOR_OVERVIEW


class CheckoutTransitionError(Exception):
    """Raised when checkout progress would skip or revisit a state."""

    def __init__(self, from_state: CheckoutState, to_state: CheckoutState) -> None:
        """Initialize the error.

        Args:
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid checkout transition: {from_state.value} -> {to_state.value}"
        )


class CheckoutProgress:
    """Tracks a checkout walk and enforces the strict field order.

    Each observed state must be the current state (the error did not
    clear) or its immediate successor.
    """

    def __init__(self, run_id: str | None = None) -> None:
        """Initialize at NEEDS_FIRST_NAME.

        Args:
            run_id: Optional run ID for logging.
        """
        self._state = CheckoutState.NEEDS_FIRST_NAME
        self._log = bind_component(logger, "ui", run_id, flow="checkout")

    @property
    def state(self) -> CheckoutState:
        """Get the current state."""
        return self._state

    def is_ready(self) -> bool:
        """Check if the overview has been reached."""
        return self._state == CheckoutState.READY_FOR_OVERVIEW

    def expected_error(self) -> str | None:
        """Error literal shown in the current state, if any."""
        return CHECKOUT_ERRORS.get(self._state)

    def get_expected_next_state(self) -> CheckoutState | None:
        """Get the next state in sequence, or None once ready."""
        index = CHECKOUT_ORDER.index(self._state)
        if index + 1 < len(CHECKOUT_ORDER):
            return CHECKOUT_ORDER[index + 1]
        return None

    def can_transition(self, to_state: CheckoutState) -> bool:
        """Check if moving to the given state keeps the order."""
        return to_state in (self._state, self.get_expected_next_state())

    def transition(self, to_state: CheckoutState) -> None:
        """Move to a new state.

        Raises:
            CheckoutTransitionError: If the transition skips a field.
        """
        if not self.can_transition(to_state):
            raise CheckoutTransitionError(self._state, to_state)

        old_state = self._state
        self._state = to_state
        self._log.info(
            "checkout_state_transition",
            from_state=old_state.value,
            to_state=to_state.value,
        )
