# hie_core/common/logging.py
"""
structlog setup shared by all settings modules.

Stdlib logging (Django's LOGGING dict) owns handlers and levels; structlog only
formats the event dict and hands the rendered line to the stdlib logger.
"""
from __future__ import annotations

import structlog

REDACTED = "[REDACTED]"
SENSITIVE_KEYS = frozenset({"password", "temporary_password", "access", "refresh", "token"})


def redact_sensitive(logger, method_name, event_dict):
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def configure_structlog(*, json_logs: bool = False) -> None:
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_sensitive,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
