"""
Services package for Storage Quest.

Contains the inventory store and the helpers that drive it: demo seeding,
drag and drop translation, and catalogue form handling.
"""

from .catalog_forms import add_default_unit, quick_add, submit_new_definition, submit_rename
from .drag_drop import (
    INVENTORY_DROP_ID,
    InventoryTarget,
    SlotTarget,
    apply_drop,
    item_drag_id,
    parse_drop_target,
    parse_item_drag_id,
    slot_target_id,
)
from .inventory_store import InventoryStore, StoreListener
from .seed_data import build_seed_snapshot, seed_demo_data

__all__ = [
    "INVENTORY_DROP_ID",
    "InventoryStore",
    "InventoryTarget",
    "SlotTarget",
    "StoreListener",
    "add_default_unit",
    "apply_drop",
    "build_seed_snapshot",
    "item_drag_id",
    "parse_drop_target",
    "parse_item_drag_id",
    "quick_add",
    "seed_demo_data",
    "slot_target_id",
    "submit_new_definition",
    "submit_rename",
]
