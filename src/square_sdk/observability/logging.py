"""
Structured logging infrastructure for square-sdk.
Provides consistent, machine-readable logs for every request the SDK makes.

Log Structure:
    {
        "app": "square-sdk",           # Application identifier
        "layer": "transport",          # Architectural layer
        "component": "pipeline",       # Specific component
        "module": "...",               # Python module (optional)
        "method": "GET",               # Request context
        "event": "request_succeeded",  # What happened
        ...
    }

Architectural Layers:
    - config: Settings loading and validation
    - core: Request building, schemas, retry, error mapping
    - transport: HTTP adapter and request pipeline
    - resources: Generated resource facades

The SDK never configures logging on import. Applications call
setup_logging() once; until then structlog falls back to its defaults.
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict

Layer = Literal["config", "core", "transport", "resources"]

# Header names whose values must never reach a log line
REDACTED_HEADERS = frozenset({"authorization", "proxy-authorization"})


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the application identifier to every log entry."""
    event_dict["app"] = "square-sdk"
    return event_dict


def add_severity_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Add severity level for cloud logging compatibility.
    Maps Python log levels to standard severity levels (Cloud Logging, Stackdriver, etc.).
    """
    level = event_dict.get("level")
    if level:
        severity_map = {
            "debug": "DEBUG",
            "info": "INFO",
            "warning": "WARNING",
            "error": "ERROR",
            "critical": "CRITICAL",
        }
        event_dict["severity"] = severity_map.get(level, "INFO")
    return event_dict


def mask_headers(headers: dict[str, str]) -> dict[str, str]:
    """Copy of ``headers`` with credential values replaced by ``***``."""
    return {
        name: ("***" if name.lower() in REDACTED_HEADERS else value)
        for name, value in headers.items()
    }


def redact_headers(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credential headers bound under the ``headers`` key."""
    headers = event_dict.get("headers")
    if isinstance(headers, dict):
        event_dict["headers"] = mask_headers(headers)
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structured logging for an application using the SDK.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON. If False, use human-readable format (dev mode).
        include_timestamp: Whether to include ISO timestamps in logs

    Usage:
        >>> from square_sdk.observability import setup_logging
        >>> setup_logging(level="DEBUG", json_logs=True)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_log_level,
        add_severity_level,
        redact_headers,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: str | None = None,
    layer: Layer | None = None,
    component: str | None = None,
    **initial_context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance with architectural context.

    Args:
        name: Logger name (typically __name__ of the calling module)
        layer: Architectural layer (config, core, transport, resources)
        component: Specific component within the layer
        **initial_context: Additional context key-value pairs to bind to logger

    Returns:
        Configured structlog logger with bound context

    Usage:
        >>> log = get_logger(__name__, layer="transport", component="pipeline")
        >>> log.info("request_succeeded", status_code=200)
    """
    context = {}

    if layer:
        context["layer"] = layer

    if component:
        context["component"] = component

    if name:
        context["module"] = name

    context.update(initial_context)

    # initial values keep the proxy lazy, so module-level loggers pick up
    # whatever setup_logging() configures later
    return structlog.get_logger(name, **context)


def get_sdk_logger(
    component: str,
    layer: Layer = "transport",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for an SDK component.

    Args:
        component: Component name (e.g., "pipeline", "aiohttp-client", "catalog-api")
        layer: Architectural layer, defaults to "transport"
        **context: Additional context (environment, square_version, etc.)

    Usage:
        >>> log = get_sdk_logger("pipeline", environment="sandbox")
        >>> log.info("request_started", method="GET", path="/v2/locations")
    """
    return get_logger(
        "square_sdk",
        layer=layer,
        component=component,
        **context,
    )
