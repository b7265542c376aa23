"""Flow Scenarios: ordered compositions of actions and assertions."""

from conformance.scenarios.runner import (
    FailureKind,
    FlowScenario,
    ScenarioResult,
    ScenarioStep,
    classify_failure,
)
from conformance.scenarios.state_machine import (
    ScenarioState,
    ScenarioStateMachine,
    ScenarioStateTransitionError,
)


__all__ = [
    "FailureKind",
    "FlowScenario",
    "ScenarioResult",
    "ScenarioState",
    "ScenarioStateMachine",
    "ScenarioStateTransitionError",
    "ScenarioStep",
    "classify_failure",
]
