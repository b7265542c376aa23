"""Unit tests for the scenario state machine."""

import pytest

from conformance.scenarios.state_machine import (
    ScenarioState,
    ScenarioStateMachine,
    ScenarioStateTransitionError,
)


class TestScenarioStateMachine:
    """Tests for ScenarioStateMachine."""

    def test_initial_state(self) -> None:
        machine = ScenarioStateMachine("login_standard", "run-1")

        assert machine.state == ScenarioState.PENDING
        assert machine.is_pending()
        assert not machine.is_terminal()

    @pytest.mark.parametrize("terminal", [ScenarioState.PASSED, ScenarioState.FAILED])
    def test_running_to_terminal(self, terminal: ScenarioState) -> None:
        machine = ScenarioStateMachine("login_standard", "run-1")
        machine.transition(ScenarioState.RUNNING)

        machine.transition(terminal)

        assert machine.state == terminal
        assert machine.is_terminal()

    def test_cannot_finish_without_running(self) -> None:
        machine = ScenarioStateMachine("login_standard", "run-1")

        with pytest.raises(ScenarioStateTransitionError) as exc_info:
            machine.transition(ScenarioState.PASSED)

        assert exc_info.value.from_state == ScenarioState.PENDING
        assert exc_info.value.to_state == ScenarioState.PASSED

    def test_terminal_states_are_final(self) -> None:
        machine = ScenarioStateMachine("login_standard", "run-1")
        machine.transition(ScenarioState.RUNNING)
        machine.transition(ScenarioState.FAILED)

        for state in ScenarioState:
            assert not machine.can_transition(state)
