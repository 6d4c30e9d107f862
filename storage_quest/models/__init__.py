"""
Data models for Storage Quest.

This package contains the pydantic models for item definitions, item
instances, storage units, derived item locations, and store snapshots.
"""

from .item import ItemDefinition, ItemInstance, new_entity_id, now_millis
from .location import INVENTORY, InventoryLocation, ItemLocation, SlotLocation
from .snapshot import StoreSnapshot
from .unit import SlotGrid, StorageUnit, create_empty_grid

__all__ = [
    "INVENTORY",
    "InventoryLocation",
    "ItemDefinition",
    "ItemInstance",
    "ItemLocation",
    "SlotGrid",
    "SlotLocation",
    "StorageUnit",
    "StoreSnapshot",
    "create_empty_grid",
    "new_entity_id",
    "now_millis",
]
