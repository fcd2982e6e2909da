"""structlog configuration.

Every module grabs ``structlog.get_logger()`` at import time; this module
decides how those events get rendered. The processor chain merges the
request-scoped contextvars (request_id, account_id), stamps level and time,
then masks credential-bearing keys before anything reaches a renderer.
"""

import logging
import sys

import structlog

from accountd.config import Settings

REDACTED = "***REDACTED***"

SENSITIVE_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "token",
        "access_token",
        "secret",
        "jwt_secret",
        "authorization",
    }
)


def redact_sensitive(logger, method_name: str, event_dict: dict) -> dict:
    """Mask values of credential-bearing keys."""
    for key in event_dict:
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
    return event_dict


def configure_logging(settings: Settings) -> None:
    """Configure structlog (and stdlib logging underneath uvicorn/SQLAlchemy)."""
    level = getattr(logging, settings.log_level)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_sensitive,
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.json_logs:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        # stderr is looked up per logger, not captured once here.
        logger_factory=lambda *args: structlog.PrintLogger(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
