"""Text rendering of the store for terminals and logs."""

from .text_render import EMPTY_CELL, display_width, render_inventory, render_item, render_store, render_unit

__all__ = ["EMPTY_CELL", "display_width", "render_inventory", "render_item", "render_store", "render_unit"]
