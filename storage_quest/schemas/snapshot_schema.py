"""
JSON schema validation for persisted store snapshots.

The schema checks the structure of the blob (envelope, catalogues, grids).
Cross-entity invariants such as unit order and single placement are checked
by the ``StoreSnapshot`` model once the structure is known to be sound.
"""

from __future__ import annotations

from typing import Any

from jsonschema import Draft7Validator
from jsonschema import ValidationError as JSONSchemaValidationError


class SnapshotSchemaValidationError(Exception):
    """Raised when snapshot payloads fail schema validation."""


_ID = {"type": "string", "minLength": 1}

STORE_SNAPSHOT_SCHEMA: dict[str, Any] = {
    "$id": "https://schemas.storage-quest.local/store-snapshot.json",
    "type": "object",
    "required": ["version", "state"],
    "additionalProperties": False,
    "properties": {
        "version": {
            "type": "integer",
            "minimum": 1,
            "description": "Snapshot format version.",
        },
        "state": {"$ref": "#/$defs/state"},
    },
    "$defs": {
        "state": {
            "type": "object",
            "required": ["itemDefinitions", "itemInstances", "units", "unitOrder"],
            "additionalProperties": False,
            "properties": {
                "itemDefinitions": {
                    "type": "object",
                    "additionalProperties": {"$ref": "#/$defs/itemDefinition"},
                },
                "itemInstances": {
                    "type": "object",
                    "additionalProperties": {"$ref": "#/$defs/itemInstance"},
                },
                "units": {
                    "type": "object",
                    "additionalProperties": {"$ref": "#/$defs/unit"},
                },
                "unitOrder": {
                    "type": "array",
                    "items": _ID,
                    "uniqueItems": True,
                    "description": "Display order of unit ids.",
                },
            },
        },
        "itemDefinition": {
            "type": "object",
            "required": ["id", "name", "emoji"],
            "additionalProperties": False,
            "properties": {
                "id": _ID,
                "name": {"type": "string"},
                "emoji": {"type": "string"},
                "color": {"type": ["string", "null"]},
            },
        },
        "itemInstance": {
            "type": "object",
            "required": ["id", "defId", "createdAt"],
            "additionalProperties": False,
            "properties": {
                "id": _ID,
                "defId": {"type": "string"},
                "label": {"type": ["string", "null"]},
                "notes": {"type": ["string", "null"]},
                "createdAt": {"type": "integer", "minimum": 0},
            },
        },
        "unit": {
            "type": "object",
            "required": ["id", "name", "rows", "cols", "slots"],
            "additionalProperties": False,
            "properties": {
                "id": _ID,
                "name": {"type": "string"},
                "rows": {"type": "integer", "minimum": 1},
                "cols": {"type": "integer", "minimum": 1},
                "slots": {
                    "type": "array",
                    "items": {
                        "type": "array",
                        "items": {"type": ["string", "null"]},
                    },
                    "description": "Row-major grid of item instance ids or null.",
                },
            },
        },
    },
}


def _build_validator(schema: dict[str, Any]) -> Draft7Validator:
    """Internal helper to construct a Draft7 validator instance."""
    return Draft7Validator(schema)


def validate_snapshot_payload(payload: dict[str, Any]) -> None:
    """
    Validate a complete snapshot blob against the canonical schema.

    Raises:
        SnapshotSchemaValidationError: if validation fails.
    """
    validator = _build_validator(STORE_SNAPSHOT_SCHEMA)
    try:
        validator.validate(payload)
    except JSONSchemaValidationError as exc:
        path = " -> ".join(str(p) for p in exc.absolute_path) if exc.absolute_path else "root"
        raise SnapshotSchemaValidationError(f"Snapshot schema validation failed at {path}: {exc.message}") from exc


def snapshot_payload_errors(payload: Any) -> list[str]:
    """Collect every schema violation of ``payload`` as readable messages."""
    validator = _build_validator(STORE_SNAPSHOT_SCHEMA)
    errors = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path]):
        path = " -> ".join(str(p) for p in error.absolute_path) if error.absolute_path else "root"
        errors.append(f"{path}: {error.message}")
    return errors
