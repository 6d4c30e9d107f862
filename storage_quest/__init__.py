"""
Storage Quest: organize items into named, grid-shaped storage units.

The inventory store in ``storage_quest.services.inventory_store`` holds all
state; everything else reads from it or drives its operations.
"""

__version__ = "0.1.0"
