"""
Logging processors for structlog event processing.

This module provides the processor that stamps a correlation id on every
event.
"""

import uuid
from typing import Any


def add_correlation_id(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Add correlation ID to log entries if not already present.

    Context bound through ``bind_store_context`` is merged before this
    processor runs, so a bound correlation id always wins.

    Args:
        _logger: Logger instance (unused)
        _name: Logger name (unused)
        event_dict: Event dictionary to enhance

    Returns:
        Enhanced event dictionary with correlation ID
    """
    if "correlation_id" not in event_dict:
        event_dict["correlation_id"] = str(uuid.uuid4())

    return event_dict
