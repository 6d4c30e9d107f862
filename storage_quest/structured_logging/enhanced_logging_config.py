"""
Structlog-based logging configuration for Storage Quest.

This module is the single entry point of the logging system. Events are
produced by structlog, routed through the standard library logging module,
and rendered either as JSON lines or as human readable key/value text.

CORRECT USAGE:
    from storage_quest.structured_logging.enhanced_logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("Item placed", item_id=item_id, unit_id=unit_id)
"""

import json
import logging
import os
import sys
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.stdlib import BoundLogger, LoggerFactory

from storage_quest.structured_logging.logging_context import bind_store_context, clear_store_context
from storage_quest.structured_logging.logging_processors import add_correlation_id

__all__ = [
    "bind_store_context",
    "clear_store_context",
    "configure_enhanced_structlog",
    "detect_environment",
    "get_logger",
    "setup_enhanced_logging",
]

VALID_ENVIRONMENTS = ["unit_test", "local", "production"]


class _LoggingState:  # pylint: disable=too-few-public-methods
    """State container for logging initialization to avoid global statements."""

    initialized: bool = False
    signature: str | None = None


_logging_state = _LoggingState()


def detect_environment() -> str:
    """
    Detect the current environment based on various indicators.

    Returns:
        Environment name: "unit_test", "local", or "production"
    """
    if "pytest" in sys.modules or "pytest" in sys.argv[0]:
        return "unit_test"

    logging_env = os.getenv("LOGGING_ENVIRONMENT", "")
    if logging_env in VALID_ENVIRONMENTS:
        return logging_env

    return "local"


def configure_enhanced_structlog(
    environment: str | None = None,
    log_level: str = "INFO",
    log_format: str = "human",
    disable_logging: bool = False,
) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        environment: Environment name (auto-detected if None)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: "json" for JSON lines, "human" for key/value text
        disable_logging: Silence every handler when True
    """
    if environment is None:
        environment = detect_environment()

    processors: list[Any] = [
        merge_contextvars,
        add_correlation_id,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer: Any = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"])

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if disable_logging:
        root_logger.addHandler(logging.NullHandler())
        root_logger.setLevel(logging.CRITICAL + 1)
    else:
        # Diagnostics go to stderr; stdout belongs to command output
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    structlog.configure(
        processors=processors + [renderer],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=False,
    )

    structlog.get_logger(__name__).debug(
        "Structlog configured",
        environment=environment,
        log_level=log_level,
        log_format=log_format,
    )


def setup_enhanced_logging(config: dict[str, Any], *, force_reconfigure: bool = False) -> None:
    """
    Set up logging from a configuration dictionary.

    Args:
        config: Configuration dictionary with a "logging" section, as produced by
            ``AppConfig.to_legacy_dict()``
        force_reconfigure: When True, reconfigure even if logging is already set up
    """
    config_signature = json.dumps(config, sort_keys=True, default=str)

    if _logging_state.initialized and not force_reconfigure:
        get_logger("storage_quest.structured_logging.setup").debug(
            "setup_enhanced_logging skipped; logging system already initialized",
            config_signature=_logging_state.signature,
        )
        return

    logging_config = config.get("logging", {})
    environment = logging_config.get("environment", detect_environment())

    configure_enhanced_structlog(
        environment=environment,
        log_level=logging_config.get("level", "INFO"),
        log_format=logging_config.get("format", "human"),
        disable_logging=logging_config.get("disable_logging", False),
    )

    get_logger("storage_quest.structured_logging.enhanced").info(
        "Logging system initialized",
        environment=environment,
        log_level=logging_config.get("level", "INFO"),
        log_format=logging_config.get("format", "human"),
    )

    _logging_state.initialized = True
    _logging_state.signature = config_signature


def get_logger(name: str) -> BoundLogger:
    """
    Get a Structlog logger with the specified name.

    This is the public API for obtaining loggers. All application code
    should use this function rather than calling structlog.get_logger()
    directly.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured Structlog logger instance
    """
    return structlog.get_logger(name)
