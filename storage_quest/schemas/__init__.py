"""JSON schemas for Storage Quest persisted data."""

from .snapshot_schema import (
    STORE_SNAPSHOT_SCHEMA,
    SnapshotSchemaValidationError,
    snapshot_payload_errors,
    validate_snapshot_payload,
)

__all__ = [
    "STORE_SNAPSHOT_SCHEMA",
    "SnapshotSchemaValidationError",
    "snapshot_payload_errors",
    "validate_snapshot_payload",
]
