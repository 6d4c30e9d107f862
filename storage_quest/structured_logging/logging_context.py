"""
Session context for structured logging.

A CLI invocation (or an embedding application's request) binds its
identifiers once; ``merge_contextvars`` then adds them to every event the
store, persistence, and seeding modules emit until the context is cleared.
"""

import uuid

from structlog.contextvars import bind_contextvars, clear_contextvars


def bind_store_context(
    correlation_id: str | None = None,
    snapshot_name: str | None = None,
    command: str | None = None,
    **kwargs,
) -> None:
    """
    Bind store session identifiers to the current logging context.

    Args:
        correlation_id: Id shared by every event of the session (generated if None)
        snapshot_name: Name of the persisted snapshot in use
        command: CLI command or caller-defined action name
        **kwargs: Additional context variables; None values are skipped
    """
    values = {
        "correlation_id": correlation_id or str(uuid.uuid4()),
        "snapshot_name": snapshot_name,
        "command": command,
        **kwargs,
    }
    bind_contextvars(**{key: value for key, value in values.items() if value is not None})


def clear_store_context() -> None:
    """Drop every value bound by ``bind_store_context``."""
    clear_contextvars()
