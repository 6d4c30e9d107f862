"""
Randomized operation sequences against the InventoryStore.

Each test drives a seeded random mix of placements, removals, moves, and
deletions, then checks the invariants that must hold after every step.
"""

import random

import pytest

from storage_quest.models import SlotLocation, StoreSnapshot
from storage_quest.services.inventory_store import InventoryStore
from storage_quest.tests.fixtures.store_fixtures import placement_counts

OPERATIONS = ("place", "remove", "return", "delete_item", "create_item", "delete_unit", "create_unit")


def _random_step(store: InventoryStore, rng: random.Random, def_id: str) -> None:
    operation = rng.choice(OPERATIONS)
    items = list(store.item_instances) + ["ghost-item"]
    unit_ids = store.unit_order + ["ghost-unit"]

    if operation == "place":
        unit_id = rng.choice(unit_ids)
        unit = store.get_unit(unit_id)
        rows, cols = (unit.rows, unit.cols) if unit else (2, 2)
        store.place_item(rng.choice(items), unit_id, rng.randint(-1, rows), rng.randint(-1, cols))
    elif operation == "remove":
        store.remove_item_from_slot(rng.choice(unit_ids), rng.randint(0, 3), rng.randint(0, 5))
    elif operation == "return":
        store.return_to_inventory(rng.choice(items))
    elif operation == "delete_item" and rng.random() < 0.3:
        store.delete_item(rng.choice(items))
    elif operation == "create_item":
        store.create_item(def_id, f"item-{rng.randint(0, 999)}")
    elif operation == "delete_unit" and rng.random() < 0.1:
        store.delete_unit(rng.choice(unit_ids))
    elif operation == "create_unit" and len(store.unit_order) < 4:
        store.create_unit("Extra", rng.randint(1, 4), rng.randint(1, 6))


def _assert_invariants(store: InventoryStore) -> None:
    counts = placement_counts(store)
    assert all(count == 1 for count in counts.values())
    assert set(counts) <= set(store.item_instances)
    assert sorted(store.unit_order) == sorted(store.units)
    # Revalidating the snapshot re-runs every structural check.
    StoreSnapshot.model_validate(store.snapshot().model_dump())


@pytest.mark.parametrize("seed", range(8))
def test_invariants_hold_under_random_operations(shelf_scene, seed):
    """Test uniqueness, referential integrity, and order hold after every step."""
    rng = random.Random(seed)
    store = shelf_scene.store

    for _ in range(200):
        _random_step(store, rng, shelf_scene.console_def_id)
        _assert_invariants(store)


@pytest.mark.parametrize("seed", range(4))
def test_placed_and_unplaced_partition_the_catalogue(shelf_scene, seed):
    """Test every catalogue item is either in exactly one slot or in the inventory list."""
    rng = random.Random(seed)
    store = shelf_scene.store

    for _ in range(100):
        _random_step(store, rng, shelf_scene.console_def_id)

    placed = set(placement_counts(store))
    unplaced = store.list_unplaced_items()
    assert placed.isdisjoint(unplaced)
    assert placed | set(unplaced) == set(store.item_instances)
    for item_id in store.item_instances:
        located = isinstance(store.find_item_location(item_id), SlotLocation)
        assert located == (item_id in placed)


@pytest.mark.parametrize("seed", range(4))
def test_placement_preserves_catalogue_size(shelf_scene, seed):
    """Test place, remove, and return never create or destroy item instances."""
    rng = random.Random(seed)
    store = shelf_scene.store
    item_ids = list(store.item_instances)
    unit_ids = store.unit_order

    for _ in range(150):
        action = rng.choice(("place", "remove", "return"))
        if action == "place":
            unit = store.get_unit(rng.choice(unit_ids))
            store.place_item(rng.choice(item_ids), unit.id, rng.randrange(unit.rows), rng.randrange(unit.cols))
        elif action == "remove":
            unit = store.get_unit(rng.choice(unit_ids))
            store.remove_item_from_slot(unit.id, rng.randrange(unit.rows), rng.randrange(unit.cols))
        else:
            store.return_to_inventory(rng.choice(item_ids))

        assert sorted(store.item_instances) == sorted(item_ids)


@pytest.mark.parametrize("seed", range(4))
def test_repeat_placement_is_idempotent(shelf_scene, seed):
    """Test place_item applied twice with the same arguments matches a single call."""
    rng = random.Random(seed)
    store = shelf_scene.store
    item_ids = list(store.item_instances)

    for _ in range(30):
        unit = store.get_unit(rng.choice(store.unit_order))
        args = (rng.choice(item_ids), unit.id, rng.randrange(unit.rows), rng.randrange(unit.cols))
        store.place_item(*args)
        once = store.snapshot()
        store.place_item(*args)
        assert store.snapshot() == once
