"""Observability module for structured logging."""

from conformance.observability.logging import (
    bind_component,
    bind_scenario_context,
    clear_scenario_context,
    configure_logging,
)


__all__ = [
    "bind_component",
    "bind_scenario_context",
    "clear_scenario_context",
    "configure_logging",
]
