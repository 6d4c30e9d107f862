"""Storage unit model: a named grid of optional item instance ids."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .item import new_entity_id

SlotGrid = list[list[str | None]]


def create_empty_grid(rows: int, cols: int) -> SlotGrid:
    """Build a rows x cols grid with every cell empty."""
    return [[None for _ in range(cols)] for _ in range(rows)]


class StorageUnit(BaseModel):
    """
    A named container with a fixed-size grid of slots.

    Every cell holds either ``None`` or exactly one item instance id. The grid
    shape always matches ``rows`` x ``cols``.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
    )

    id: str = Field(default_factory=new_entity_id, min_length=1, description="Unit identifier")
    name: str = Field(..., description="Display name")
    rows: int = Field(..., ge=1, description="Number of grid rows")
    cols: int = Field(..., ge=1, description="Number of grid columns")
    slots: SlotGrid = Field(default_factory=list, description="Grid of item instance ids, row-major")

    @model_validator(mode="after")
    def validate_grid_shape(self) -> Self:
        """Fill a missing grid and reject grids that do not match the dimensions."""
        if not self.slots:
            self.slots = create_empty_grid(self.rows, self.cols)
            return self
        if len(self.slots) != self.rows or any(len(row) != self.cols for row in self.slots):
            raise ValueError(f"Slot grid does not match {self.rows}x{self.cols} dimensions")
        return self

    def in_bounds(self, row: int, col: int) -> bool:
        """True when (row, col) addresses a cell of this unit."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def iter_cells(self):
        """Yield (row, col, item_id) for every cell, row-major."""
        for r, row in enumerate(self.slots):
            for c, cell in enumerate(row):
                yield r, c, cell

    def placed_item_ids(self) -> list[str]:
        """Ids of every item occupying a cell of this unit, row-major."""
        return [cell for _, _, cell in self.iter_cells() if cell is not None]
