# src/basalmodel/core/logging.py
"""Optional logging setup for applications that use basalmodel.

basalmodel modules log through ``structlog.get_logger(__name__)`` and never
install handlers themselves. Hosts without their own logging setup can call
``configure_logging()`` (or ``configure_from_settings()``) once at startup.

Structlog events and stdlib records share one ProcessorFormatter handler on
the root logger, so mapper summaries and third-party library messages come
out in the same format. Calling ``configure_logging()`` again swaps out the
handler it installed earlier; handlers the host added are left alone.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

from basalmodel.core.config import LoggingSettings

# Held at WARNING or stricter whatever the root level is
_NOISY_LOGGERS: tuple[str, ...] = ("dynaconf",)

_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class _BasalHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Stream handler owned by configure_logging, replaced on reconfiguration."""


def _strip_formatter_keys(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def _pre_chain() -> list[Any]:
    """Processors applied to both structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def _render_chain(json_output: bool) -> list[Any]:
    if json_output:
        return [
            _strip_formatter_keys,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [_strip_formatter_keys, structlog.dev.ConsoleRenderer(colors=False)]


def _resolve_level(level: str) -> int:
    try:
        return _LEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level {level!r}, expected one of {', '.join(_LEVELS)}") from None


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging through one basalmodel handler.

    Args:
        json_output: Emit one JSON object per line instead of console output
        level: DEBUG, INFO, WARNING or ERROR, case-insensitive
        stream: Destination; defaults to ``sys.stdout`` as it is at call time

    Raises:
        ValueError: If ``level`` is not one of the names above.
    """
    log_level = _resolve_level(level)

    structlog.configure(
        processors=[*_pre_chain(), ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers that were already created
        cache_logger_on_first_use=False,
    )

    handler = _BasalHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(ProcessorFormatter(processors=_render_chain(json_output), foreign_pre_chain=_pre_chain()))

    root = logging.getLogger()
    for previous in [h for h in root.handlers if isinstance(h, _BasalHandler)]:
        root.removeHandler(previous)
        previous.close()
    root.addHandler(handler)
    root.setLevel(log_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def configure_from_settings(settings: LoggingSettings, *, stream: TextIO | None = None) -> None:
    """Apply a validated LoggingSettings block (see ``basalmodel.core.config``)."""
    configure_logging(json_output=settings.json_output, level=settings.level, stream=stream)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound structlog logger for ``name`` (typically ``__name__``)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
