"""Tests for the demo dataset."""

from storage_quest.models import SlotLocation
from storage_quest.services.inventory_store import InventoryStore
from storage_quest.services.seed_data import SEED_DEFINITIONS, SEED_ITEMS, build_seed_snapshot, seed_demo_data


def _by_label(store: InventoryStore) -> dict[str, str]:
    return {item.label: item_id for item_id, item in store.item_instances.items()}


def test_seed_populates_empty_store(store):
    """Test the demo dataset lands in an empty store."""
    assert seed_demo_data(store) is True

    names = sorted(d.name for d in store.item_definitions.values())
    assert names == sorted(name for name, _ in SEED_DEFINITIONS)
    assert sorted(_by_label(store)) == sorted(label for _, label in SEED_ITEMS)
    assert [store.get_unit(u).name for u in store.unit_order] == ["Shelf A", "Bin B"]


def test_seed_unit_shapes(store):
    """Test the seeded units have the demo dimensions."""
    seed_demo_data(store)

    shelf, bin_b = (store.get_unit(u) for u in store.unit_order)
    assert (shelf.rows, shelf.cols) == (3, 6)
    assert (bin_b.rows, bin_b.cols) == (2, 4)


def test_seed_placements(store):
    """Test every demo item starts in its demo slot."""
    seed_demo_data(store)
    shelf_id, bin_id = store.unit_order
    labels = _by_label(store)

    expected = {
        "SNES": (shelf_id, 0, 0),
        "N64": (shelf_id, 0, 1),
        "GameCube": (shelf_id, 0, 2),
        "PS2": (shelf_id, 1, 0),
        "Clean Code": (shelf_id, 2, 0),
        "Raspberry Pi 4": (bin_id, 0, 0),
    }
    for label, (unit_id, row, col) in expected.items():
        assert store.find_item_location(labels[label]) == SlotLocation(unit_id=unit_id, row=row, col=col)
    assert store.list_unplaced_items() == []


def test_seed_items_reference_matching_definitions(store):
    """Test consoles use the Console definition and the book uses Book."""
    seed_demo_data(store)
    definitions = store.item_definitions

    for item in store.item_instances.values():
        definition = definitions[item.def_id]
        if item.label == "Clean Code":
            assert (definition.name, definition.emoji) == ("Book", "📚")
        elif item.label == "Raspberry Pi 4":
            assert definition.name == "Hardware"
        else:
            assert (definition.name, definition.emoji) == ("Console", "🎮")


def test_seed_runs_once(store):
    """Test a second seed leaves the first dataset untouched."""
    seed_demo_data(store)
    first = store.snapshot()

    assert seed_demo_data(store) is False
    assert store.snapshot() == first


def test_seed_skipped_when_store_has_units(store):
    """Test a store with only an empty unit is not considered empty."""
    store.create_unit("Mine", 1, 1)

    assert seed_demo_data(store) is False
    assert store.item_instances == {}


def test_seed_skipped_when_store_has_items(store):
    """Test a store with an unplaced item is not considered empty."""
    def_id = store.create_definition("Thing", "📦")
    store.create_item(def_id)

    assert seed_demo_data(store) is False
    assert store.units == {}


def test_build_seed_snapshot_generates_fresh_ids():
    """Test two builds never share ids."""
    first = build_seed_snapshot()
    second = build_seed_snapshot()

    assert set(first.units).isdisjoint(second.units)
    assert set(first.item_instances).isdisjoint(second.item_instances)
