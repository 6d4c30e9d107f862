"""
Item definition and item instance models.

A definition is the reusable template (name and icon); an instance is one
concrete object the user can drag around. Instances never record where they
are placed: location is derived from the unit grids.
"""

import time
import uuid

from pydantic import BaseModel, ConfigDict, Field


def new_entity_id() -> str:
    """Generate an opaque unique id for a definition, instance, or unit."""
    return str(uuid.uuid4())


def now_millis() -> int:
    """Current time as milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


class ItemDefinition(BaseModel):
    """Template describing a category of object, such as "Console" or "Book"."""

    model_config = ConfigDict(
        # Reject unknown fields so corrupted snapshots fail loudly
        extra="forbid",
        populate_by_name=True,
    )

    id: str = Field(default_factory=new_entity_id, min_length=1, description="Definition identifier")
    name: str = Field(..., description="Display name")
    emoji: str = Field(..., description="Icon glyph shown for every instance")
    color: str | None = Field(default=None, description="Optional accent color")


class ItemInstance(BaseModel):
    """One concrete, placeable object referencing an item definition."""

    __slots__ = ()  # Performance optimization for frequently instantiated items

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
    )

    id: str = Field(default_factory=new_entity_id, min_length=1, description="Instance identifier")
    def_id: str = Field(..., alias="defId", description="Id of the ItemDefinition this instance uses")
    label: str | None = Field(default=None, description="Optional label shown under the icon")
    notes: str | None = Field(default=None, description="Optional free-form notes")
    created_at: int = Field(
        default_factory=now_millis,
        alias="createdAt",
        description="Creation time in milliseconds since the Unix epoch",
    )

    def __repr__(self) -> str:
        return f"<ItemInstance(id={self.id}, def_id={self.def_id}, label={self.label})>"
