"""
Translation of drag gestures into store calls.

The presentation layer names drop zones with string ids: ``inventory`` for
the unplaced pool and ``slot:<unit_id>:<row>:<col>`` for grid cells.
Draggable items are named ``item:<item_id>``. This module builds and parses
those ids and applies a finished drag to the store.
"""

from dataclasses import dataclass

from ..structured_logging.enhanced_logging_config import get_logger
from .inventory_store import InventoryStore

logger = get_logger(__name__)

INVENTORY_DROP_ID = "inventory"
SLOT_PREFIX = "slot"
ITEM_PREFIX = "item"


@dataclass(frozen=True)
class InventoryTarget:
    """Drop onto the inventory pool."""


@dataclass(frozen=True)
class SlotTarget:
    """Drop onto cell (row, col) of a unit."""

    unit_id: str
    row: int
    col: int


DropTarget = InventoryTarget | SlotTarget


def slot_target_id(unit_id: str, row: int, col: int) -> str:
    return f"{SLOT_PREFIX}:{unit_id}:{row}:{col}"


def item_drag_id(item_id: str) -> str:
    return f"{ITEM_PREFIX}:{item_id}"


def parse_item_drag_id(drag_id: str | None) -> str | None:
    """Return the item id of an ``item:<id>`` drag id, or None."""
    if not drag_id:
        return None
    prefix, sep, item_id = drag_id.partition(":")
    if prefix != ITEM_PREFIX or not sep or not item_id:
        return None
    return item_id


def parse_drop_target(over_id: str | None) -> DropTarget | None:
    """
    Parse a drop zone id.

    Returns:
        InventoryTarget, SlotTarget, or None when the id is missing, unknown,
        or carries a non-integer row or column.
    """
    if not over_id:
        return None
    if over_id == INVENTORY_DROP_ID:
        return InventoryTarget()

    prefix = f"{SLOT_PREFIX}:"
    if not over_id.startswith(prefix):
        return None
    # Row and column are the last two fields; the unit id may itself hold colons
    parts = over_id[len(prefix) :].rsplit(":", 2)
    if len(parts) != 3 or not parts[0]:
        return None
    unit_id, row_text, col_text = parts
    try:
        row = int(row_text)
        col = int(col_text)
    except ValueError:
        return None
    return SlotTarget(unit_id=unit_id, row=row, col=col)


def apply_drop(store: InventoryStore, item_id: str | None, over_id: str | None) -> bool:
    """
    Apply a finished drag of ``item_id`` over the zone ``over_id``.

    Dropping on the inventory clears the item's current slot; dropping on a
    slot places the item there. Missing items and unknown zones are ignored.

    Returns:
        True if the store changed or the item already sat at the target.
    """
    if not item_id:
        return False

    target = parse_drop_target(over_id)
    if target is None:
        logger.debug("Drop ignored; no recognised target", item_id=item_id, over_id=over_id)
        return False

    if isinstance(target, InventoryTarget):
        return store.return_to_inventory(item_id)

    return store.place_item(item_id, target.unit_id, target.row, target.col)
