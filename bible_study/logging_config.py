"""Structured logging configuration (structlog)."""
import logging
import sys
import structlog

from bible_study.config import get_settings

# Chatty library loggers kept at WARNING unless asked for (DB_ECHO covers SQL).
_QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite")


def configure_logging() -> None:
    """structlog for app events (console locally, JSON elsewhere) plus stdlib logging for libraries."""
    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.app_env in ("local", "test")
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound logger for a module; events use dotted names (plan.created, cache.get_failed)."""
    return structlog.get_logger(name)
