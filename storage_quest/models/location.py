"""
Derived item location values.

An item is either in the inventory pool or in exactly one slot. These values
are computed by scanning the grids and are never stored.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class InventoryLocation(BaseModel):
    """The item is not placed in any slot."""

    model_config = ConfigDict(frozen=True)

    type: Literal["inventory"] = "inventory"


class SlotLocation(BaseModel):
    """The item occupies cell (row, col) of a unit."""

    model_config = ConfigDict(frozen=True)

    type: Literal["slot"] = "slot"
    unit_id: str
    row: int
    col: int


ItemLocation = Annotated[InventoryLocation | SlotLocation, Field(discriminator="type")]

INVENTORY = InventoryLocation()
