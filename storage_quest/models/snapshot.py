"""
Immutable snapshot of the whole inventory state.

Snapshots are what readers hold and what the persistence layer writes. The
wire format keeps the camelCase keys of the persisted blob
(``itemDefinitions``, ``itemInstances``, ``units``, ``unitOrder``).
"""

from collections import Counter
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .item import ItemDefinition, ItemInstance
from .unit import StorageUnit


class StoreSnapshot(BaseModel):
    """Point-in-time copy of definitions, instances, units, and unit order."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    item_definitions: dict[str, ItemDefinition] = Field(default_factory=dict, alias="itemDefinitions")
    item_instances: dict[str, ItemInstance] = Field(default_factory=dict, alias="itemInstances")
    units: dict[str, StorageUnit] = Field(default_factory=dict)
    unit_order: list[str] = Field(default_factory=list, alias="unitOrder")

    @model_validator(mode="after")
    def validate_invariants(self) -> Self:
        """
        Reject states that break the store invariants.

        - catalogue keys match the ids of their entries
        - unit_order is a permutation of the unit ids
        - every placed id is a known instance and appears in at most one cell
        """
        for label, catalogue in (
            ("itemDefinitions", self.item_definitions),
            ("itemInstances", self.item_instances),
            ("units", self.units),
        ):
            for key, entry in catalogue.items():
                if key != entry.id:
                    raise ValueError(f"{label} key '{key}' does not match entry id '{entry.id}'")

        if len(self.unit_order) != len(set(self.unit_order)) or set(self.unit_order) != set(self.units):
            raise ValueError("unitOrder must list every unit id exactly once")

        placements = Counter(item_id for unit in self.units.values() for item_id in unit.placed_item_ids())
        duplicated = sorted(item_id for item_id, count in placements.items() if count > 1)
        if duplicated:
            raise ValueError(f"Items placed in more than one slot: {duplicated}")
        unknown = sorted(item_id for item_id in placements if item_id not in self.item_instances)
        if unknown:
            raise ValueError(f"Slots reference unknown items: {unknown}")
        return self

    @classmethod
    def empty(cls) -> "StoreSnapshot":
        """Snapshot of a store with no definitions, items, or units."""
        return cls()

    def is_empty(self) -> bool:
        """True when there are no units and no item instances."""
        return not self.units and not self.item_instances

    def to_wire(self) -> dict[str, Any]:
        """JSON-compatible dict using the persisted camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_wire(cls, payload: dict[str, Any]) -> "StoreSnapshot":
        """Build a snapshot from its persisted dict form."""
        return cls.model_validate(payload)
