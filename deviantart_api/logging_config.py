"""
Structured Logging - JSON or console logging with context propagation.

Library modules log through the standard logging module. configure_logging()
routes those records through structlog so applications get:
- JSON output for log aggregation, or colored console output
- Context fields (e.g. the endpoint being fetched) bound via contextvars
"""
import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, bound_contextvars, clear_contextvars


def configure_logging(
    service_name: str = "deviantart_api",
    log_level: str = "INFO",
    json_output: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        service_name: Name added to every log entry
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_output: Whether to output JSON (True) or human-readable (False)
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_service_info(service_name),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    ))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Quiet noisy libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def _add_service_info(service_name: str):
    """Processor to add service information to all log entries."""
    def processor(logger, method_name, event_dict):
        event_dict["service"] = service_name
        return event_dict
    return processor


def bind_context(**kwargs) -> None:
    """
    Bind key-value pairs to the logging context.

    Usage:
        bind_context(feed="popular")
        logger.info("Fetching page")  # includes feed
    """
    bind_contextvars(**kwargs)


def clear_context() -> None:
    clear_contextvars()


class LogContext:
    """
    Context manager for scoped logging context.

    Usage:
        with LogContext(endpoint="/browse/tags"):
            logger.info("Starting")
        # endpoint is back to its previous binding (or unbound) after the block
    """

    def __init__(self, **kwargs):
        self.context = kwargs
        self._bound = None

    def __enter__(self):
        self._bound = bound_contextvars(**self.context)
        self._bound.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._bound.__exit__(exc_type, exc_val, exc_tb)
        self._bound = None
        return False
