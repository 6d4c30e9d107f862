"""
Application factory for Storage Quest.

Builds a ready-to-use store: rehydrated from the persisted snapshot, seeded
with demo data on first run, and wired for autosave.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ..config import AppConfig, get_config
from ..persistence.snapshot_storage import SnapshotStorage
from ..services.inventory_store import InventoryStore
from ..services.seed_data import seed_demo_data
from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class StoreSession:
    """A store together with the storage that backs it."""

    store: InventoryStore
    storage: SnapshotStorage
    seeded: bool = False
    detach_autosave: Callable[[], None] | None = None

    def save(self) -> bool:
        """Write the current state immediately."""
        return self.storage.save(self.store.snapshot())

    def close(self) -> None:
        """Stop autosaving. The store stays usable in memory."""
        if self.detach_autosave is not None:
            self.detach_autosave()
            self.detach_autosave = None


def open_store(config: AppConfig | None = None) -> StoreSession:
    """
    Create a store from configuration.

    Loading order: rehydrate from the snapshot file, seed the demo dataset if
    the result is empty and seeding is enabled, write the seeded state, then
    attach autosave if enabled.
    """
    config = config or get_config()
    storage = SnapshotStorage.from_config(config.storage)

    snapshot = storage.load()
    store = InventoryStore(snapshot)
    logger.info(
        "Store opened",
        path=str(storage.path),
        rehydrated=snapshot is not None,
        units=len(store.unit_order),
    )

    seeded = False
    if config.storage.seed_on_first_load:
        seeded = seed_demo_data(store)
        if seeded and config.storage.autosave:
            storage.save(store.snapshot())

    session = StoreSession(store=store, storage=storage, seeded=seeded)
    if config.storage.autosave:
        session.detach_autosave = storage.attach(store)
    return session
