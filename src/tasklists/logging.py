"""
Centralized logging configuration using structlog

Per-request fields (``request_id``, ``user_id``) live in structlog's
contextvars store and are merged into every event logged while the request
is being served.
"""

import logging
import secrets
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

REQUEST_ID_HEADER = "X-Request-ID"


def _resolve_level(debug: bool, log_level: str | None) -> int:
    if log_level:
        level = logging.getLevelName(log_level.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if debug else logging.INFO


def configure_logging(debug: bool = False, log_level: str | None = None) -> None:
    """Configure structlog on top of the standard library logging module.

    Args:
        debug: Render colored console lines instead of JSON.
        log_level: Level name such as ``"WARNING"``; falls back to DEBUG or
            INFO depending on ``debug`` when missing or unknown.
    """
    logging.basicConfig(
        level=_resolve_level(debug, log_level),
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def new_request_id() -> str:
    """Return an 11 character url-safe id (8 random bytes)."""
    return secrets.token_urlsafe(8)


def bind_request(request_id: str | None = None) -> str:
    """Start a fresh log context for an incoming request and return its id.

    A client supplied id is reused so log lines can be correlated with the
    caller's own logs.
    """
    clear_contextvars()
    request_id = request_id[:64] if request_id else new_request_id()
    bind_contextvars(request_id=request_id)
    return request_id


def bind_user_id(user_id: str) -> None:
    """Tag the remaining log lines of this request with the signed-in user."""
    bind_contextvars(user_id=user_id)


def clear_request_context() -> None:
    clear_contextvars()
