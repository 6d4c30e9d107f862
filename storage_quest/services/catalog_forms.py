"""
Form handling for the catalogue panels.

Covers the quick-add buttons, the new-category form, the add-unit button,
and the rename prompt. Each helper normalises raw user input before calling
the store and ignores input a form would refuse to submit.
"""

from ..config import GridConfig
from ..structured_logging.enhanced_logging_config import get_logger
from .inventory_store import InventoryStore

logger = get_logger(__name__)


def quick_add(store: InventoryStore, def_id: str) -> str:
    """Create an unlabeled item of the chosen category."""
    return store.create_item(def_id)


def submit_new_definition(
    store: InventoryStore,
    name: str,
    emoji: str | None,
    color: str | None = None,
    grid_config: GridConfig | None = None,
) -> str | None:
    """
    Create a category from form input.

    The name is trimmed and a blank name is refused. A blank icon falls back
    to the configured default emoji.

    Returns:
        The new definition id, or None if the form was refused.
    """
    grid_config = grid_config or GridConfig()
    clean_name = (name or "").strip()
    if not clean_name:
        logger.debug("New category refused; blank name")
        return None
    return store.create_definition(clean_name, emoji or grid_config.default_emoji, color)


def add_default_unit(store: InventoryStore, grid_config: GridConfig | None = None) -> str:
    """Create a unit with the configured default name and size."""
    grid_config = grid_config or GridConfig()
    return store.create_unit(grid_config.default_unit_name, grid_config.default_rows, grid_config.default_cols)


def submit_rename(store: InventoryStore, unit_id: str, name: str | None) -> bool:
    """Rename a unit; a cancelled or empty prompt changes nothing."""
    if not name:
        return False
    return store.rename_unit(unit_id, name)
