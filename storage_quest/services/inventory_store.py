"""
Inventory store: the single mutable state container of Storage Quest.

The store owns the item definition catalogue, the item instance catalogue,
the storage units with their slot grids, and the unit display order. The
public methods below are the only mutation surface.

Invariants held after every operation:
    1. An item instance id appears in at most one cell across all units.
    2. Every id in a grid is a known item instance.
    3. ``unit_order`` is a permutation of the unit ids.

Referential misses (unknown unit or item id) and out-of-range coordinates are
silent no-ops: the mutator logs a warning and returns ``False``. Callers that
prefer an exception use ``require_unit`` / ``require_item``.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from ..exceptions import ErrorContext, InvalidGeometryError, NotFoundError
from ..models import (
    INVENTORY,
    ItemDefinition,
    ItemInstance,
    ItemLocation,
    SlotLocation,
    StorageUnit,
    StoreSnapshot,
    create_empty_grid,
)
from ..structured_logging.enhanced_logging_config import get_logger

StoreListener = Callable[[str, StoreSnapshot], None]

logger = get_logger(__name__)


@dataclass
class _MutationRecord:
    """Set by a mutator once it has actually changed the state."""

    applied: bool = False


class InventoryStore:
    """
    Explicit, process-local owner of the inventory state.

    Every operation and query runs under one re-entrant lock, so operations
    are atomic and totally ordered even when the host is multi-threaded.
    Change listeners receive the name of the operation plus a snapshot taken
    before the state lock was released. Notifications are delivered in
    mutation order: the next mutation waits until every listener has seen
    the previous one.
    """

    def __init__(self, snapshot: StoreSnapshot | None = None) -> None:
        self._lock = threading.RLock()
        self._dispatch_lock = threading.RLock()
        self._listeners: list[StoreListener] = []
        self._replace_state(snapshot or StoreSnapshot.empty())

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    @property
    def item_definitions(self) -> dict[str, ItemDefinition]:
        with self._lock:
            return {key: value.model_copy(deep=True) for key, value in self._item_definitions.items()}

    @property
    def item_instances(self) -> dict[str, ItemInstance]:
        with self._lock:
            return {key: value.model_copy(deep=True) for key, value in self._item_instances.items()}

    @property
    def units(self) -> dict[str, StorageUnit]:
        with self._lock:
            return {key: value.model_copy(deep=True) for key, value in self._units.items()}

    @property
    def unit_order(self) -> list[str]:
        with self._lock:
            return list(self._unit_order)

    def get_unit(self, unit_id: str) -> StorageUnit | None:
        with self._lock:
            unit = self._units.get(unit_id)
            return unit.model_copy(deep=True) if unit else None

    def get_item(self, item_id: str) -> ItemInstance | None:
        with self._lock:
            item = self._item_instances.get(item_id)
            return item.model_copy(deep=True) if item else None

    def get_definition(self, def_id: str) -> ItemDefinition | None:
        with self._lock:
            definition = self._item_definitions.get(def_id)
            return definition.model_copy(deep=True) if definition else None

    def has_item(self, item_id: str) -> bool:
        with self._lock:
            return item_id in self._item_instances

    def require_unit(self, unit_id: str) -> StorageUnit:
        """
        Return a copy of the unit or raise.

        Raises:
            NotFoundError: If no unit has this id.
        """
        unit = self.get_unit(unit_id)
        if unit is None:
            raise NotFoundError(
                f"Storage unit '{unit_id}' does not exist",
                context=ErrorContext(operation="require_unit", unit_id=unit_id),
                resource_type="unit",
                resource_id=unit_id,
            )
        return unit

    def require_item(self, item_id: str) -> ItemInstance:
        """
        Return a copy of the item instance or raise.

        Raises:
            NotFoundError: If no item instance has this id.
        """
        item = self.get_item(item_id)
        if item is None:
            raise NotFoundError(
                f"Item '{item_id}' does not exist",
                context=ErrorContext(operation="require_item", item_id=item_id),
                resource_type="item",
                resource_id=item_id,
            )
        return item

    def is_empty(self) -> bool:
        """True when the store holds no units and no item instances."""
        with self._lock:
            return not self._units and not self._item_instances

    def snapshot(self) -> StoreSnapshot:
        """Return an immutable copy of the whole state."""
        with self._lock:
            return StoreSnapshot(
                item_definitions={k: v.model_copy(deep=True) for k, v in self._item_definitions.items()},
                item_instances={k: v.model_copy(deep=True) for k, v in self._item_instances.items()},
                units={k: v.model_copy(deep=True) for k, v in self._units.items()},
                unit_order=list(self._unit_order),
            )

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    def find_item_location(self, item_id: str) -> ItemLocation:
        """
        Locate an item by scanning every cell of every unit.

        Ids found in no grid, including deleted and never-created ids, are
        reported as being in the inventory.
        """
        with self._lock:
            return self._locate(item_id)

    def list_unplaced_items(self) -> list[str]:
        """Catalogue ids not placed in any unit, in catalogue insertion order."""
        with self._lock:
            placed = {item_id for unit in self._units.values() for item_id in unit.placed_item_ids()}
            return [item_id for item_id in self._item_instances if item_id not in placed]

    # ------------------------------------------------------------------
    # Units
    # ------------------------------------------------------------------

    def create_unit(self, name: str, rows: int, cols: int) -> str:
        """
        Create a unit with an empty rows x cols grid and append it to the order.

        Raises:
            InvalidGeometryError: If rows or cols is below 1.
        """
        if rows < 1 or cols < 1:
            raise InvalidGeometryError(
                f"Unit grid must have at least one row and one column, got {rows}x{cols}",
                context=ErrorContext(operation="create_unit"),
                rows=rows,
                cols=cols,
            )

        with self._mutation("create_unit") as change:
            unit = StorageUnit(name=name, rows=rows, cols=cols, slots=create_empty_grid(rows, cols))
            self._units[unit.id] = unit
            self._unit_order.append(unit.id)
            change.applied = True

        logger.info("Storage unit created", unit_id=unit.id, unit_name=name, rows=rows, cols=cols)
        return unit.id

    def rename_unit(self, unit_id: str, name: str) -> bool:
        with self._mutation("rename_unit") as change:
            unit = self._units.get(unit_id)
            if unit is None:
                logger.warning("Rename ignored; unit not found", unit_id=unit_id)
                return False
            unit.name = name
            change.applied = True

        logger.info("Storage unit renamed", unit_id=unit_id, unit_name=name)
        return True

    def delete_unit(self, unit_id: str) -> bool:
        """
        Remove a unit and its order entry.

        Items that were placed in the unit stay in the catalogue and fall back
        to the inventory pool.
        """
        with self._mutation("delete_unit") as change:
            unit = self._units.pop(unit_id, None)
            if unit is None:
                logger.warning("Delete ignored; unit not found", unit_id=unit_id)
                return False
            self._unit_order.remove(unit_id)
            released = unit.placed_item_ids()
            change.applied = True

        logger.info(
            "Storage unit deleted",
            unit_id=unit_id,
            unit_name=unit.name,
            released_items=len(released),
        )
        return True

    # ------------------------------------------------------------------
    # Definitions and items
    # ------------------------------------------------------------------

    def create_definition(self, name: str, emoji: str, color: str | None = None) -> str:
        """Add an item definition. Names are not deduplicated."""
        with self._mutation("create_definition") as change:
            definition = ItemDefinition(name=name, emoji=emoji, color=color)
            self._item_definitions[definition.id] = definition
            change.applied = True

        logger.info("Item definition created", def_id=definition.id, definition_name=name)
        return definition.id

    def create_item(self, def_id: str, label: str | None = None, notes: str | None = None) -> str:
        """
        Create an item instance of ``def_id`` in the inventory pool.

        The definition id is a caller contract and is not validated; an
        instance with a dangling definition renders as nothing.
        """
        with self._mutation("create_item") as change:
            if def_id not in self._item_definitions:
                logger.debug("Item created with unknown definition", def_id=def_id)
            item = ItemInstance(def_id=def_id, label=label, notes=notes)
            self._item_instances[item.id] = item
            change.applied = True

        logger.info("Item created", item_id=item.id, def_id=def_id, label=label)
        return item.id

    def delete_item(self, item_id: str) -> bool:
        """Clear the slot the item occupies, if any, then drop it from the catalogue."""
        with self._mutation("delete_item") as change:
            if item_id not in self._item_instances:
                logger.warning("Delete ignored; item not found", item_id=item_id)
                return False
            location = self._locate(item_id)
            if isinstance(location, SlotLocation):
                self._units[location.unit_id].slots[location.row][location.col] = None
            del self._item_instances[item_id]
            change.applied = True

        logger.info("Item deleted", item_id=item_id, was_placed=isinstance(location, SlotLocation))
        return True

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def place_item(self, item_id: str, unit_id: str, row: int, col: int) -> bool:
        """
        Move an item into cell (row, col) of a unit.

        The item's previous cell, in this unit or another, is cleared first.
        Whatever occupied the target cell is overwritten and becomes unplaced;
        it is neither deleted nor swapped into the vacated cell.

        Returns:
            True if the item is at the target cell afterwards, False if the
            unit or item is unknown or the cell is out of range.
        """
        with self._mutation("place_item") as change:
            target = self._units.get(unit_id)
            if target is None:
                logger.warning("Placement ignored; unit not found", item_id=item_id, unit_id=unit_id)
                return False
            if not target.in_bounds(row, col):
                logger.warning(
                    "Placement ignored; slot out of range",
                    item_id=item_id,
                    unit_id=unit_id,
                    row=row,
                    col=col,
                    rows=target.rows,
                    cols=target.cols,
                )
                return False
            if item_id not in self._item_instances:
                logger.warning("Placement ignored; item not found", item_id=item_id, unit_id=unit_id)
                return False

            source = self._locate(item_id)
            if source == SlotLocation(unit_id=unit_id, row=row, col=col):
                return True
            if isinstance(source, SlotLocation):
                self._units[source.unit_id].slots[source.row][source.col] = None

            displaced = target.slots[row][col]
            target.slots[row][col] = item_id
            change.applied = True

        logger.info(
            "Item placed",
            item_id=item_id,
            unit_id=unit_id,
            row=row,
            col=col,
            from_slot=isinstance(source, SlotLocation),
            displaced_item_id=displaced,
        )
        return True

    def remove_item_from_slot(self, unit_id: str, row: int, col: int) -> bool:
        """
        Clear cell (row, col) of a unit, returning its item to the inventory.

        Returns:
            True if an item was removed, False for an unknown unit, an
            out-of-range cell, or a cell that was already empty.
        """
        with self._mutation("remove_item_from_slot") as change:
            unit = self._units.get(unit_id)
            if unit is None:
                logger.warning("Slot clear ignored; unit not found", unit_id=unit_id)
                return False
            if not unit.in_bounds(row, col):
                logger.warning("Slot clear ignored; slot out of range", unit_id=unit_id, row=row, col=col)
                return False
            item_id = unit.slots[row][col]
            if item_id is None:
                return False
            unit.slots[row][col] = None
            change.applied = True

        logger.info("Item removed from slot", item_id=item_id, unit_id=unit_id, row=row, col=col)
        return True

    def return_to_inventory(self, item_id: str) -> bool:
        """Clear whichever slot holds the item. False if it was not placed."""
        with self._mutation("return_to_inventory") as change:
            location = self._locate(item_id)
            if not isinstance(location, SlotLocation):
                return False
            self._units[location.unit_id].slots[location.row][location.col] = None
            change.applied = True

        logger.info(
            "Item returned to inventory",
            item_id=item_id,
            unit_id=location.unit_id,
            row=location.row,
            col=location.col,
        )
        return True

    # ------------------------------------------------------------------
    # Whole-state operations
    # ------------------------------------------------------------------

    def load_snapshot(self, snapshot: StoreSnapshot) -> None:
        """Replace the entire state with a copy of ``snapshot``."""
        with self._mutation("load_snapshot") as change:
            self._replace_state(snapshot)
            change.applied = True

        logger.info(
            "Store state replaced",
            units=len(snapshot.units),
            items=len(snapshot.item_instances),
            definitions=len(snapshot.item_definitions),
        )

    def populate_if_empty(self, snapshot: StoreSnapshot) -> bool:
        """
        Replace the state with ``snapshot`` only if the store has no units and
        no item instances. The emptiness check and the replacement are one
        atomic step.
        """
        with self._mutation("populate_if_empty") as change:
            if not self.is_empty():
                return False
            self._replace_state(snapshot)
            change.applied = True
        return True

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            A callable that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _mutation(self, operation: str) -> Iterator[_MutationRecord]:
        """
        Run one mutation under the state lock and notify listeners in order.

        The dispatch lock is taken before the state lock and held until every
        listener has returned, so a later mutation cannot overtake an earlier
        one on its way to the listeners. Queries only take the state lock and
        are never blocked by a slow listener.
        """
        record = _MutationRecord()
        with self._dispatch_lock:
            with self._lock:
                yield record
                listeners = list(self._listeners)
                state = self.snapshot() if record.applied and listeners else None

            if state is not None:
                self._dispatch(operation, state, listeners)

    def _locate(self, item_id: str) -> ItemLocation:
        for unit_id in self._unit_order:
            for r, c, cell in self._units[unit_id].iter_cells():
                if cell == item_id:
                    return SlotLocation(unit_id=unit_id, row=r, col=c)
        return INVENTORY

    def _replace_state(self, snapshot: StoreSnapshot) -> None:
        self._item_definitions = {k: v.model_copy(deep=True) for k, v in snapshot.item_definitions.items()}
        self._item_instances = {k: v.model_copy(deep=True) for k, v in snapshot.item_instances.items()}
        self._units = {k: v.model_copy(deep=True) for k, v in snapshot.units.items()}
        self._unit_order = list(snapshot.unit_order)

    def _dispatch(self, operation: str, state: StoreSnapshot, listeners: list[StoreListener]) -> None:
        for listener in listeners:
            try:
                listener(operation, state)
            except Exception as exc:  # pylint: disable=broad-exception-caught  # Reason: Listener errors unpredictable, mutation already settled
                logger.error(
                    "Store listener failed",
                    operation=operation,
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )


__all__ = ["InventoryStore"]
