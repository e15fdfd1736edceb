# src/clusterward/core/logging.py
"""Process-wide log output for controllers.

Modules log in two ways: ``logging.getLogger(__name__)`` for plain
diagnostics and ``structlog.get_logger(__name__)`` for reconciliation
events (task_finished, reconcile_failed, ...). Both end up on one stdout
handler whose ProcessorFormatter renders them identically, either as
console lines or as one JSON object per line.

Call configure_logging once per process, with the ``logging`` section of
the loaded settings (see clusterward.core.config.init_settings).
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

from clusterward.core.config import LoggingSettings

# Libraries that narrate their own internals at DEBUG
_QUIET_LIBRARIES = ("dynaconf", "tenacity")


def _drop_formatter_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    # ProcessorFormatter always adds both keys
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _pre_chain() -> list[Any]:
    """Processors shared by structlog events and stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]


def _renderer(json_output: bool) -> list[Any]:
    if json_output:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Route structlog and stdlib logging to stdout.

    Args:
        settings: The ``logging`` settings section (defaults when None)
    """
    settings = settings or LoggingSettings()
    level = logging.getLevelName(settings.level)
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfigurable: tests switch between console and JSON
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=[_drop_formatter_bookkeeping, *_renderer(settings.json_output)],
            foreign_pre_chain=pre_chain,
        )
    )
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
