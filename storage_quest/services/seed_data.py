"""Demo dataset installed the first time an empty store is opened."""

from ..models import ItemDefinition, ItemInstance, StorageUnit, StoreSnapshot, create_empty_grid
from ..structured_logging.enhanced_logging_config import get_logger
from .inventory_store import InventoryStore

logger = get_logger(__name__)

SEED_DEFINITIONS: list[tuple[str, str]] = [
    ("Console", "🎮"),
    ("Book", "📚"),
    ("Hardware", "🧰"),
    ("Camera", "📷"),
    ("Game", "🕹️"),
]

# (definition name, label)
SEED_ITEMS: list[tuple[str, str]] = [
    ("Console", "SNES"),
    ("Console", "N64"),
    ("Console", "GameCube"),
    ("Console", "PS2"),
    ("Book", "Clean Code"),
    ("Hardware", "Raspberry Pi 4"),
]

# (unit name, rows, cols, [(row, col, item label)])
SEED_UNITS: list[tuple[str, int, int, list[tuple[int, int, str]]]] = [
    (
        "Shelf A",
        3,
        6,
        [
            (0, 0, "SNES"),
            (0, 1, "N64"),
            (0, 2, "GameCube"),
            (1, 0, "PS2"),
            (2, 0, "Clean Code"),
        ],
    ),
    ("Bin B", 2, 4, [(0, 0, "Raspberry Pi 4")]),
]


def build_seed_snapshot() -> StoreSnapshot:
    """Build a fresh copy of the demo dataset with newly generated ids."""
    definitions: dict[str, ItemDefinition] = {}
    def_ids: dict[str, str] = {}
    for name, emoji in SEED_DEFINITIONS:
        definition = ItemDefinition(name=name, emoji=emoji)
        definitions[definition.id] = definition
        def_ids[name] = definition.id

    items: dict[str, ItemInstance] = {}
    item_ids: dict[str, str] = {}
    for def_name, label in SEED_ITEMS:
        item = ItemInstance(def_id=def_ids[def_name], label=label)
        items[item.id] = item
        item_ids[label] = item.id

    units: dict[str, StorageUnit] = {}
    unit_order: list[str] = []
    for unit_name, rows, cols, placements in SEED_UNITS:
        slots = create_empty_grid(rows, cols)
        for row, col, label in placements:
            slots[row][col] = item_ids[label]
        unit = StorageUnit(name=unit_name, rows=rows, cols=cols, slots=slots)
        units[unit.id] = unit
        unit_order.append(unit.id)

    return StoreSnapshot(
        item_definitions=definitions,
        item_instances=items,
        units=units,
        unit_order=unit_order,
    )


def seed_demo_data(store: InventoryStore) -> bool:
    """
    Populate the demo dataset if the store has no units and no item instances.

    Returns:
        True if the dataset was installed, False if the store already had data.
    """
    seeded = store.populate_if_empty(build_seed_snapshot())
    if seeded:
        logger.info("Demo data seeded", units=len(SEED_UNITS), items=len(SEED_ITEMS))
    else:
        logger.debug("Demo data skipped; store already has data")
    return seeded
