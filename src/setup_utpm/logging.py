"""Logging configuration rendering to GitHub Actions workflow commands."""
import json
import logging
import os
import sys
from typing import Any, List, Mapping, Optional

import structlog
from structlog.types import EventDict, Processor

APP_LOGGER = "setup_utpm"
DEFAULT_LOG_LEVEL = "INFO"
IGNORED_LOGGERS = [
    "aiohttp",
    "asyncio"
]

# Levels that map onto a workflow command; anything else prints as plain text
WORKFLOW_COMMANDS = {
    "debug": "debug",
    "warning": "warning",
    "error": "error",
    "critical": "error",
}


def escape_data(message: str) -> str:
    """Escape a message for use as workflow command data."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandRenderer:
    """Render events as GitHub Actions log lines.

    Info events print as plain text. Debug, warning and error events become
    ``::debug::``, ``::warning::`` and ``::error::`` commands so the runner
    can fold and annotate them. Remaining keys are appended as compact JSON.
    """
    def __call__(self, _: Any, __: str, event_dict: EventDict) -> str:
        level = event_dict.pop("level", "info")
        event = event_dict.pop("event", "")
        event_dict.pop("logger", None)
        exception = event_dict.pop("exception", None)

        if isinstance(event, dict):
            event = dict(event)
            message = str(event.pop("event", ""))
            data = {**event, **event_dict}
        else:
            message = str(event)
            data = dict(event_dict)

        if data:
            message = f"{message} {json.dumps(data, default=str, separators=(',', ':'))}"
        if exception:
            message = f"{message}\n{exception}"

        command = WORKFLOW_COMMANDS.get(level)
        if command:
            return f"::{command}::{escape_data(message)}"
        return message


def resolve_log_level(env: Optional[Mapping[str, str]] = None) -> str:
    """Pick the log level from the runner environment."""
    env = os.environ if env is None else env

    override = env.get("SETUP_UTPM_LOG_LEVEL", "").strip().upper()
    if override in logging.getLevelNamesMapping():
        return override

    if env.get("RUNNER_DEBUG") == "1" or env.get("ACTIONS_STEP_DEBUG", "").lower() == "true":
        return "DEBUG"
    return DEFAULT_LOG_LEVEL


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structured logging for the action.

    Everything goes to STDOUT, which the runner scans for workflow commands.
    """
    level = level or resolve_log_level()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level)
    )
    logging.getLogger(APP_LOGGER).setLevel(getattr(logging, level))
    for name in IGNORED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        WorkflowCommandRenderer()
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
