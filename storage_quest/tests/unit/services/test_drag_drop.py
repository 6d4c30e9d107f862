"""Tests for drop zone ids and applying finished drags to the store."""

import pytest

from storage_quest.models import INVENTORY, SlotLocation, StoreSnapshot
from storage_quest.services.drag_drop import (
    INVENTORY_DROP_ID,
    InventoryTarget,
    SlotTarget,
    apply_drop,
    item_drag_id,
    parse_drop_target,
    parse_item_drag_id,
    slot_target_id,
)


def test_slot_target_id_format():
    assert slot_target_id("u1", 2, 5) == "slot:u1:2:5"


def test_item_drag_id_round_trip():
    assert item_drag_id("abc") == "item:abc"
    assert parse_item_drag_id("item:abc") == "abc"


@pytest.mark.parametrize("drag_id", [None, "", "item:", "slot:abc", "abc"])
def test_parse_item_drag_id_rejects_malformed(drag_id):
    assert parse_item_drag_id(drag_id) is None


def test_parse_inventory_target():
    assert parse_drop_target(INVENTORY_DROP_ID) == InventoryTarget()


def test_parse_slot_target():
    assert parse_drop_target("slot:unit-1:0:3") == SlotTarget(unit_id="unit-1", row=0, col=3)


def test_parse_slot_target_keeps_uuid_unit_ids():
    """Test unit ids containing dashes survive parsing."""
    unit_id = "0f8c2a9e-1b7d-4c1e-9d55-3a2b1c0d9e8f"

    target = parse_drop_target(slot_target_id(unit_id, 1, 2))

    assert target == SlotTarget(unit_id=unit_id, row=1, col=2)


def test_parse_slot_target_keeps_colons_in_unit_ids():
    assert parse_drop_target(slot_target_id("bin:2", 1, 3)) == SlotTarget(unit_id="bin:2", row=1, col=3)
    assert parse_drop_target("slot:a:b:c:0:0") == SlotTarget(unit_id="a:b:c", row=0, col=0)


@pytest.mark.parametrize(
    "over_id",
    [None, "", "trash", "slot:", "slot:u1:0", "slot::0:0", "slot:u1:a:0", "slot:u1:0:b", "slot:u1:0:0:x", "shelf:u1:0:0"],
)
def test_parse_drop_target_rejects_malformed(over_id):
    assert parse_drop_target(over_id) is None


def test_drop_on_slot_places_item(shelf_scene):
    """Test dropping on a slot zone moves the item there."""
    store = shelf_scene.store

    assert apply_drop(store, shelf_scene.snes_id, slot_target_id(shelf_scene.bin_id, 1, 3)) is True
    assert store.find_item_location(shelf_scene.snes_id) == SlotLocation(unit_id=shelf_scene.bin_id, row=1, col=3)


def test_drop_on_unit_whose_id_contains_colons(shelf_scene):
    """Test a loaded unit with a colon in its id still accepts drops."""
    store = shelf_scene.store
    wire = store.snapshot().to_wire()
    wire["units"]["bin:2"] = {**wire["units"].pop(shelf_scene.bin_id), "id": "bin:2"}
    wire["unitOrder"] = [shelf_scene.shelf_id, "bin:2"]
    store.load_snapshot(StoreSnapshot.from_wire(wire))

    assert apply_drop(store, shelf_scene.snes_id, slot_target_id("bin:2", 1, 3)) is True
    assert store.find_item_location(shelf_scene.snes_id) == SlotLocation(unit_id="bin:2", row=1, col=3)


def test_drop_on_inventory_clears_slot(shelf_scene):
    """Test dropping a placed item on the inventory zone unplaces it."""
    store = shelf_scene.store
    store.place_item(shelf_scene.snes_id, shelf_scene.shelf_id, 0, 0)

    assert apply_drop(store, shelf_scene.snes_id, INVENTORY_DROP_ID) is True
    assert store.find_item_location(shelf_scene.snes_id) == INVENTORY
    assert store.get_unit(shelf_scene.shelf_id).slots[0][0] is None


def test_drop_unplaced_item_on_inventory_is_noop(shelf_scene):
    """Test an item already in the inventory stays there without changes."""
    store = shelf_scene.store
    before = store.snapshot()

    assert apply_drop(store, shelf_scene.snes_id, INVENTORY_DROP_ID) is False
    assert store.snapshot() == before


@pytest.mark.parametrize("over_id", [None, "nowhere", "slot:u1:x:y"])
def test_drop_outside_any_zone_is_ignored(shelf_scene, over_id):
    """Test a drag that ends over no recognised zone changes nothing."""
    store = shelf_scene.store
    store.place_item(shelf_scene.snes_id, shelf_scene.shelf_id, 0, 0)
    before = store.snapshot()

    assert apply_drop(store, shelf_scene.snes_id, over_id) is False
    assert store.snapshot() == before


def test_drop_without_item_is_ignored(shelf_scene):
    store = shelf_scene.store

    assert apply_drop(store, None, slot_target_id(shelf_scene.shelf_id, 0, 0)) is False
    assert store.get_unit(shelf_scene.shelf_id).slots[0][0] is None


def test_drop_on_out_of_range_slot_is_ignored(shelf_scene):
    store = shelf_scene.store

    assert apply_drop(store, shelf_scene.snes_id, slot_target_id(shelf_scene.bin_id, 2, 0)) is False
    assert store.find_item_location(shelf_scene.snes_id) == INVENTORY


def test_drop_onto_occupied_slot_overwrites(shelf_scene):
    """Test the dragged item replaces the occupant, which returns to inventory."""
    store = shelf_scene.store
    store.place_item(shelf_scene.n64_id, shelf_scene.shelf_id, 1, 1)

    apply_drop(store, shelf_scene.snes_id, slot_target_id(shelf_scene.shelf_id, 1, 1))

    assert store.get_unit(shelf_scene.shelf_id).slots[1][1] == shelf_scene.snes_id
    assert shelf_scene.n64_id in store.list_unplaced_items()
