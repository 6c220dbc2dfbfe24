"""structlog bootstrap for the Encore service.

Every record, whether it comes from an Encore module or from a library
logging through the standard ``logging`` module (httpx, uvicorn), passes
through one processor chain.  The chain stamps each event with the service
name and the deployment environment before rendering it, so log lines
from several deployments can share one sink.

``production`` renders one JSON object per line; any other environment
gets the coloured console renderer.
"""

import logging
import sys

import structlog

SERVICE_NAME = "encore"

# httpx logs every request at INFO; the provider adapters already log failures.
_CHATTY_LIBRARIES = ("httpx", "httpcore")


def _service_context(app_env: str) -> structlog.types.Processor:
    """Processor that tags each event with ``service`` and ``env``."""

    def _add(
        logger: object, method_name: str, event_dict: structlog.types.EventDict
    ) -> structlog.types.EventDict:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("env", app_env)
        return event_dict

    return _add


def configure_logging(log_level: str = "INFO", app_env: str = "development") -> None:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
        app_env: Deployment environment; ``"production"`` switches to JSON.
    """
    level = logging.getLevelName(log_level.upper())

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _service_context(app_env),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if app_env == "production":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a logger bound to *name*, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(logger_name=name)
