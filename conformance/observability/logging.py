"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

import structlog


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for the suite.

    Sets up structlog with timestamps, log levels and context binding so
    scenario and session events carry the scenario name and run ID.

    Args:
        level: Logging level (default: INFO).
        output: Output stream (default: stderr).
        json_format: Whether to use JSON format (default: True).
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=output.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )

    # httpx logs every request through the standard library at INFO
    logging.basicConfig(
        format="%(message)s",
        stream=output,
        level=level,
    )
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def bind_scenario_context(scenario: str, run_id: str) -> None:
    """Bind scenario context to all subsequent log messages.

    Args:
        scenario: Flow scenario name.
        run_id: Unique run identifier.
    """
    structlog.contextvars.bind_contextvars(scenario=scenario, run_id=run_id)


def clear_scenario_context() -> None:
    """Clear scenario context from log messages."""
    structlog.contextvars.unbind_contextvars("scenario", "run_id")


def bind_component(
    logger: structlog.typing.FilteringBoundLogger,
    component: str,
    run_id: str | None = None,
    **context: object,
) -> structlog.typing.FilteringBoundLogger:
    """Bind a component logger.

    `run_id` is bound only when given; otherwise events inherit the run ID
    of the scenario currently bound with `bind_scenario_context`.

    Args:
        logger: Logger to bind.
        component: Component name (session, ui, api, scenario).
        run_id: Optional explicit run ID.
        **context: Extra key-value pairs to bind.

    Returns:
        Bound logger.
    """
    if run_id is not None:
        context["run_id"] = run_id
    return logger.bind(component=component, **context)
