"""Scenario state machine for enforcing single, linear execution."""

from enum import Enum

import structlog


logger = structlog.get_logger()


class ScenarioState(Enum):
    """States of one Flow Scenario run.

    State transitions:
    PENDING -> RUNNING -> PASSED
    RUNNING -> FAILED on the first failing step
    """

    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


# Valid state transitions (from_state -> [to_states])
_VALID_TRANSITIONS: dict[ScenarioState, list[ScenarioState]] = {
    ScenarioState.PENDING: [ScenarioState.RUNNING],
    ScenarioState.RUNNING: [ScenarioState.PASSED, ScenarioState.FAILED],
    ScenarioState.PASSED: [],
    ScenarioState.FAILED: [],
}


class ScenarioStateTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: ScenarioState, to_state: ScenarioState) -> None:
        """Initialize the error.

        Args:
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid scenario state transition: {from_state.value} -> {to_state.value}"
        )


class ScenarioStateMachine:
    """State machine for one scenario run."""

    def __init__(self, scenario: str, run_id: str) -> None:
        """Initialize the state machine.

        Args:
            scenario: Scenario name for logging.
            run_id: Unique run identifier for logging.
        """
        self._state = ScenarioState.PENDING
        self._log = logger.bind(
            component="scenario",
            scenario=scenario,
            run_id=run_id,
        )

    @property
    def state(self) -> ScenarioState:
        """Get the current state."""
        return self._state

    def is_pending(self) -> bool:
        return self._state == ScenarioState.PENDING

    def is_terminal(self) -> bool:
        """Check if in a terminal state (PASSED or FAILED)."""
        return self._state in (ScenarioState.PASSED, ScenarioState.FAILED)

    def can_transition(self, to_state: ScenarioState) -> bool:
        """Check if a transition to the given state is valid."""
        return to_state in _VALID_TRANSITIONS.get(self._state, [])

    def transition(self, to_state: ScenarioState) -> None:
        """Transition to a new state.

        Args:
            to_state: Target state.

        Raises:
            ScenarioStateTransitionError: If transition is invalid.
        """
        if not self.can_transition(to_state):
            raise ScenarioStateTransitionError(self._state, to_state)

        old_state = self._state
        self._state = to_state

        self._log.debug(
            "scenario_state_transition",
            from_state=old_state.value,
            to_state=to_state.value,
        )
