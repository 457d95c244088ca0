"""
structlog setup for vitest-guard.

Rejected paths and arguments are logged at the call sites that refuse them;
the redactor below masks home directories and credentials in those events.
"""

import logging
import re
import sys
from typing import Any

import structlog

from vitest_guard.shared.infrastructure.config import settings

# (pattern, replacement), applied in order to every string in an event.
_REDACTIONS: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"/(?:home|Users)/[^/\s]+", re.IGNORECASE), "[HOME_REDACTED]"),
    (re.compile(r"[A-Za-z]:\\Users\\[^\\\s]+", re.IGNORECASE), "[HOME_REDACTED]"),
    (
        re.compile(r"(api[_-]?key|token|password|secret)['\"]?\s*[:=]\s*['\"]?[^'\"\s]+", re.IGNORECASE),
        r"\1=[REDACTED]",
    ),
    (re.compile(r"Bearer\s+\S+", re.IGNORECASE), "Bearer [TOKEN_REDACTED]"),
)


def _mask(value: Any) -> Any:
    if isinstance(value, str):
        for pattern, replacement in _REDACTIONS:
            value = pattern.sub(replacement, value)
        return value
    if isinstance(value, dict):
        return {key: _mask(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_mask(item) for item in value]
    return value


def privacy_redactor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask home directories and credentials in every event value, nested ones included."""
    if not settings.log_redaction_enabled:
        return event_dict
    return _mask(event_dict)


def _renderer(stream: Any) -> list[Any]:
    if settings.is_development:
        isatty = getattr(stream, "isatty", None)
        return [structlog.dev.ConsoleRenderer(colors=bool(isatty and isatty()))]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def configure_logging(stream: Any = sys.stderr) -> None:
    """
    Route structlog through stdlib logging on ``stream``.

    Development renders key/value lines (coloured only on a TTY); any other
    environment emits one JSON object per event. The threshold comes from
    ``VITEST_GUARD_LOG_LEVEL``.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            privacy_redactor,
            *_renderer(stream),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=logging.getLevelName(settings.log_level.upper()),
        force=True,
    )


def get_logger(name: str) -> Any:
    """Return a structlog logger, e.g. ``get_logger(__name__).warning("path_rejected", kind=...)``."""
    return structlog.get_logger(name)
