"""Flow Scenario runner.

A scenario is an ordered, linear list of named steps mixing Action
Helpers and Assertion Specifications. Running it:
1. Executes each step in declared order (RUNNING)
2. Stops at the first step that raises (FAILED), with no continuation
3. Records what ran and how it failed, then re-raises the original error
   so the test runner reports the scenario as failed
"""

import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

import structlog

from conformance.observability import bind_scenario_context, clear_scenario_context
from conformance.scenarios.state_machine import ScenarioState, ScenarioStateMachine
from conformance.session.errors import FixtureLifecycleError, InteractionTimeoutError


logger = structlog.get_logger()


class FailureKind(str, Enum):
    """Classification of scenario failures.

    - ASSERTION_MISMATCH: observed state diverged from the expected state
    - TIMEOUT: an interaction exceeded its ceiling
    - FIXTURE_LIFECYCLE: a Session Fixture failed to set up or tear down
    - UNEXPECTED: anything else (a defect in the scenario or the runner)
    """

    ASSERTION_MISMATCH = "ASSERTION_MISMATCH"
    TIMEOUT = "TIMEOUT"
    FIXTURE_LIFECYCLE = "FIXTURE_LIFECYCLE"
    UNEXPECTED = "UNEXPECTED"


def classify_failure(error: BaseException) -> FailureKind:
    """Map an exception onto the failure taxonomy.

    Plain AssertionError counts as a mismatch so bare `assert` statements
    inside steps classify the same way as the Assertion Specifications.
    """
    if isinstance(error, InteractionTimeoutError):
        return FailureKind.TIMEOUT
    if isinstance(error, FixtureLifecycleError):
        return FailureKind.FIXTURE_LIFECYCLE
    if isinstance(error, AssertionError):
        return FailureKind.ASSERTION_MISMATCH
    return FailureKind.UNEXPECTED


@dataclass
class ScenarioStep:
    """One named step of a scenario.

    Attributes:
        name: Step name, unique within its scenario.
        action: Callable performing the action or the check.
        args: Positional arguments for the callable.
        kwargs: Keyword arguments for the callable.
    """

    name: str
    action: Callable[..., Any]
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    def __call__(self) -> Any:
        return self.action(*self.args, **self.kwargs)


@dataclass
class ScenarioResult:
    """Complete result of one scenario run.

    Attributes:
        scenario: Scenario name.
        run_id: Unique run identifier.
        passed: Whether every step succeeded.
        final_state: Final state machine state.
        steps_performed: Names of steps that completed.
        failed_step: Name of the step that raised, if any.
        failure_kind: Classification of the failure, if any.
        failure_reason: Message of the failure, if any.
        outputs: Return value of each completed step, by step name.
        started_at: Run start time.
        finished_at: Run finish time.
    """

    scenario: str
    run_id: str
    passed: bool = False
    final_state: ScenarioState = ScenarioState.PENDING
    steps_performed: list[str] = field(default_factory=list)
    failed_step: str | None = None
    failure_kind: FailureKind | None = None
    failure_reason: str | None = None
    outputs: dict[str, Any] = field(default_factory=dict)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None

    @property
    def duration_ms(self) -> float:
        """Get total duration in milliseconds."""
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds() * 1000


class FlowScenario:
    """Ordered composition of actions and assertions for one business case.

    Steps are added with `step()` (chainable) and run once with `run()`.
    Preconditions are other scenarios whose steps are copied in front with
    `extend()`.
    """

    def __init__(self, name: str, run_id: str | None = None) -> None:
        """Initialize an empty scenario.

        Args:
            name: Scenario name used in logs and results.
            run_id: Unique run identifier (generated if not provided).
        """
        self._name = name
        self._run_id = run_id or str(uuid.uuid4())
        self._steps: list[ScenarioStep] = []
        self._state_machine = ScenarioStateMachine(name, self._run_id)
        self._result = ScenarioResult(scenario=name, run_id=self._run_id)
        # Set once this scenario is copied into another as a precondition
        self._host: tuple[FlowScenario, str] | None = None
        self._log = logger.bind(
            component="scenario",
            scenario=name,
            run_id=self._run_id,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def run_id(self) -> str:
        return self._run_id

    @property
    def state(self) -> ScenarioState:
        """Get current scenario state."""
        return self._state_machine.state

    @property
    def result(self) -> ScenarioResult:
        """Get current result."""
        return self._result

    @property
    def step_names(self) -> list[str]:
        """Names of all declared steps, in order."""
        return [s.name for s in self._steps]

    def step(
        self, name: str, action: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> "FlowScenario":
        """Append a step.

        Args:
            name: Step name, unique within the scenario.
            action: Callable to invoke.
            *args: Positional arguments for the callable.
            **kwargs: Keyword arguments for the callable.

        Returns:
            This scenario, for chaining.

        Raises:
            ValueError: If the name is already used or the scenario has run.
        """
        if not self._state_machine.is_pending():
            raise ValueError(f"Scenario {self._name} already ran; cannot add steps")
        if name in self.step_names:
            raise ValueError(f"Duplicate step name in {self._name}: {name}")
        self._steps.append(ScenarioStep(name, action, args, kwargs))
        return self

    def extend(self, precondition: "FlowScenario") -> "FlowScenario":
        """Append every step of another scenario, prefixed with its name.

        The precondition is consumed: from then on its `output()` reads
        from this scenario, so copied steps that look up earlier outputs
        still find them, and it can no longer be run on its own.

        Returns:
            This scenario, for chaining.

        Raises:
            ValueError: If the precondition already ran or was already
                extended into another scenario.
        """
        if precondition._host is not None:  # noqa: SLF001
            raise ValueError(
                f"Scenario {precondition.name} is already a precondition of "
                f"{precondition._host[0].name}"  # noqa: SLF001
            )
        if not precondition._state_machine.is_pending():  # noqa: SLF001
            raise ValueError(f"Scenario {precondition.name} already ran")

        prefix = f"{precondition.name}."
        for s in precondition._steps:  # noqa: SLF001
            self.step(f"{prefix}{s.name}", s.action, *s.args, **s.kwargs)
        precondition._host = (self, prefix)  # noqa: SLF001
        return self

    def output(self, step_name: str) -> Any:
        """Return value of a completed step.

        Raises:
            KeyError: If the step has not completed.
        """
        if self._host is not None:
            host, prefix = self._host
            return host.output(f"{prefix}{step_name}")
        return self._result.outputs[step_name]

    def run(self) -> ScenarioResult:
        """Run every step in order, stopping at the first failure.

        Returns:
            ScenarioResult of a passed run.

        Raises:
            ScenarioStateTransitionError: If the scenario already ran.
            ValueError: If the scenario was extended into another one.
            Exception: The first step failure, unchanged.
        """
        if self._host is not None:
            raise ValueError(
                f"Scenario {self._name} is a precondition of {self._host[0].name}; "
                "run that scenario instead"
            )
        self._state_machine.transition(ScenarioState.RUNNING)
        bind_scenario_context(self._name, self._run_id)
        self._log.info("scenario_started", steps=len(self._steps))

        try:
            for step in self._steps:
                self._run_step(step)
            self._state_machine.transition(ScenarioState.PASSED)
            self._result.passed = True
            return self._finalize()
        finally:
            clear_scenario_context()

    def _run_step(self, step: ScenarioStep) -> None:
        """Run one step, recording the failure before re-raising it."""
        start_time = time.perf_counter()
        try:
            output = step()
        except Exception as e:
            kind = classify_failure(e)
            self._state_machine.transition(ScenarioState.FAILED)
            self._result.failed_step = step.name
            self._result.failure_kind = kind
            self._result.failure_reason = str(e)
            self._log.warning(
                "scenario_step_failed",
                step=step.name,
                failure_kind=kind.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._finalize()
            raise

        self._result.outputs[step.name] = output
        self._result.steps_performed.append(step.name)
        self._log.debug(
            "scenario_step_complete",
            step=step.name,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

    def _finalize(self) -> ScenarioResult:
        """Stamp the finish time and log the outcome."""
        self._result.finished_at = datetime.now(UTC)
        self._result.final_state = self._state_machine.state

        self._log.info(
            "scenario_finished",
            passed=self._result.passed,
            final_state=self._result.final_state.value,
            duration_ms=round(self._result.duration_ms, 2),
            steps_performed=len(self._result.steps_performed),
            failed_step=self._result.failed_step,
        )

        return self._result
