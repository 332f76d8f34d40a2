"""
Structured logging configuration using structlog.

Production renders one JSON object per line; other environments get the
coloured console renderer. Every record carries the service name and
environment, plus whatever the request middleware bound to the context
(request_id, method, path). Records from the stdlib loggers of uvicorn,
SQLAlchemy and Alembic go through the same formatter.
"""

import logging
import sys
import structlog
from structlog.typing import EventDict, WrappedLogger

from eventplanner.core.config import get_settings

# logger name -> level when not debugging
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "alembic.runtime.migration": logging.INFO,
}


def _service_context(service: str, environment: str):
    def add_service_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        event_dict.setdefault("environment", environment)
        return event_dict

    return add_service_context


def setup_logging() -> None:
    settings = get_settings()
    production = settings.ENVIRONMENT == "production"

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(settings.APP_NAME, settings.ENVIRONMENT),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        # Tracebacks as structured frames so log shippers can index them
        shared_processors.append(structlog.processors.dict_tracebacks)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    # Replace rather than append so a reloaded app does not log twice
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
    if settings.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
