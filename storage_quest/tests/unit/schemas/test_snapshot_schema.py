"""Tests for the store snapshot JSON schema."""

import pytest

from storage_quest.schemas.snapshot_schema import (
    SnapshotSchemaValidationError,
    snapshot_payload_errors,
    validate_snapshot_payload,
)
from storage_quest.services.seed_data import build_seed_snapshot


@pytest.fixture
def payload():
    return {"version": 1, "state": build_seed_snapshot().to_wire()}


def test_seed_snapshot_is_valid(payload):
    validate_snapshot_payload(payload)
    assert snapshot_payload_errors(payload) == []


def test_empty_state_is_valid():
    payload = {"version": 1, "state": {"itemDefinitions": {}, "itemInstances": {}, "units": {}, "unitOrder": []}}
    assert snapshot_payload_errors(payload) == []


def test_missing_envelope_fields(payload):
    del payload["version"]

    with pytest.raises(SnapshotSchemaValidationError, match="version"):
        validate_snapshot_payload(payload)


def test_unknown_top_level_field(payload):
    payload["extra"] = True

    errors = snapshot_payload_errors(payload)
    assert len(errors) == 1
    assert errors[0].startswith("root:")


def test_error_path_points_at_offending_field(payload):
    unit_id = payload["state"]["unitOrder"][0]
    payload["state"]["units"][unit_id]["rows"] = 0

    with pytest.raises(SnapshotSchemaValidationError) as exc_info:
        validate_snapshot_payload(payload)

    assert f"state -> units -> {unit_id} -> rows" in str(exc_info.value)


def test_slot_cells_must_be_strings_or_null(payload):
    unit_id = payload["state"]["unitOrder"][0]
    payload["state"]["units"][unit_id]["slots"][0][0] = 42

    errors = snapshot_payload_errors(payload)
    assert any("slots -> 0 -> 0" in error for error in errors)


def test_instance_requires_created_at(payload):
    item_id = next(iter(payload["state"]["itemInstances"]))
    del payload["state"]["itemInstances"][item_id]["createdAt"]

    errors = snapshot_payload_errors(payload)
    assert errors == [f"state -> itemInstances -> {item_id}: 'createdAt' is a required property"]


def test_errors_are_collected(payload):
    """Test every violation is reported, not just the first one."""
    payload["version"] = "one"
    payload["state"]["unitOrder"] = "not-a-list"

    assert len(snapshot_payload_errors(payload)) == 2


def test_non_object_payload():
    assert snapshot_payload_errors(["not", "a", "snapshot"]) == ["root: ['not', 'a', 'snapshot'] is not of type 'object'"]
