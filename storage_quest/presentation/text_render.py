"""
Plain-text rendering of items, unit grids, and the inventory pool.

Renderers only read from the store. An item whose instance or definition is
missing renders as an empty string, mirroring how the UI draws nothing for
dangling references.
"""

import unicodedata

from ..services.inventory_store import InventoryStore

EMPTY_CELL = "·"
CELL_WIDTH = 16


def render_item(store: InventoryStore, item_id: str) -> str:
    item = store.get_item(item_id)
    if item is None:
        return ""
    definition = store.get_definition(item.def_id)
    if definition is None:
        return ""
    if item.label:
        return f"{definition.emoji} {item.label}"
    return definition.emoji


def _char_width(char: str) -> int:
    # Combining marks and format characters occupy no column
    if unicodedata.combining(char) or unicodedata.category(char) in ("Mn", "Me", "Cf"):
        return 0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2
    return 1


def display_width(text: str) -> int:
    """Number of terminal columns ``text`` occupies."""
    return sum(_char_width(char) for char in text)


def _fit(text: str, width: int) -> str:
    """Truncate or pad ``text`` to exactly ``width`` terminal columns."""
    if display_width(text) > width:
        kept: list[str] = []
        used = 0
        for char in text:
            char_width = _char_width(char)
            if used + char_width > width - 1:
                break
            kept.append(char)
            used += char_width
        text = "".join(kept) + "…"
    return text + " " * (width - display_width(text))


def render_unit(store: InventoryStore, unit_id: str, cell_width: int = CELL_WIDTH) -> str:
    """Render a unit as a header line followed by one line per grid row."""
    unit = store.get_unit(unit_id)
    if unit is None:
        return ""

    lines = [f"{unit.name} ({unit.rows}x{unit.cols}) [{unit.id}]"]
    for row in unit.slots:
        cells = [render_item(store, cell) if cell else EMPTY_CELL for cell in row]
        lines.append(" ".join(_fit(cell or EMPTY_CELL, cell_width) for cell in cells).rstrip())
    return "\n".join(lines)


def render_inventory(store: InventoryStore) -> str:
    lines = ["Inventory"]
    unplaced = store.list_unplaced_items()
    if not unplaced:
        lines.append(f"  {EMPTY_CELL} (empty)")
    for item_id in unplaced:
        lines.append(f"  {render_item(store, item_id) or '?'} [{item_id}]")
    return "\n".join(lines)


def render_store(store: InventoryStore) -> str:
    """Render the inventory pool followed by every unit in display order."""
    sections = [render_inventory(store)]
    sections.extend(render_unit(store, unit_id) for unit_id in store.unit_order)
    return "\n\n".join(sections)
