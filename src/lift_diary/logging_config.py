"""structlog setup for the CLI."""

import logging
import sys

import structlog
from structlog.contextvars import merge_contextvars

from .config import Settings, get_settings


def _add_backend(backend: str):
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("backend", backend)
        return event_dict

    return processor


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)
    is_dev = settings.APP_ENV in {"local", "dev"}

    shared_processors = [
        merge_contextvars,
        _add_backend(settings.STORAGE_BACKEND),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    renderer = structlog.dev.ConsoleRenderer() if is_dev else structlog.processors.JSONRenderer()

    # stderr keeps log lines out of command output
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
