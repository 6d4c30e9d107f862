"""
Snapshot storage for Storage Quest.

The whole store is persisted as one named, versioned JSON blob:

    {"version": 1, "state": {"itemDefinitions": ..., "itemInstances": ...,
                             "units": ..., "unitOrder": [...]}}

Writes happen through a store listener after each mutation settles, never
inside the mutation itself.
"""

import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..config import StorageConfig
from ..exceptions import SnapshotError
from ..models import StoreSnapshot
from ..schemas.snapshot_schema import (
    SnapshotSchemaValidationError,
    snapshot_payload_errors,
    validate_snapshot_payload,
)
from ..services.inventory_store import InventoryStore
from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class SnapshotStorage:
    """Reads and writes the store snapshot file.

    The file lives at ``<data_dir>/<snapshot_name>.json``.
    """

    def __init__(self, data_dir: str | Path, name: str = "storage-quest-v1", version: int = 1) -> None:
        self.data_dir = Path(data_dir)
        self.name = name
        self.version = version

    @classmethod
    def from_config(cls, config: StorageConfig) -> "SnapshotStorage":
        return cls(config.data_dir, name=config.snapshot_name, version=config.snapshot_version)

    @property
    def path(self) -> Path:
        return self.data_dir / f"{self.name}.json"

    def exists(self) -> bool:
        return self.path.exists()

    def load_strict(self) -> StoreSnapshot | None:
        """
        Load the snapshot, raising on any problem.

        Returns:
            The snapshot, or None when no snapshot file exists yet.

        Raises:
            SnapshotError: If the file cannot be read, is not valid JSON, fails
                schema validation, has another version, or breaks the store
                invariants.
        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Cannot read snapshot: {e}", path=str(self.path)) from e

        try:
            validate_snapshot_payload(payload)
        except SnapshotSchemaValidationError as e:
            raise SnapshotError(
                str(e),
                path=str(self.path),
                details={"errors": snapshot_payload_errors(payload)},
            ) from e

        if payload["version"] != self.version:
            raise SnapshotError(
                f"Snapshot version {payload['version']} is not supported (expected {self.version})",
                path=str(self.path),
                details={"found_version": payload["version"], "expected_version": self.version},
            )

        try:
            return StoreSnapshot.from_wire(payload["state"])
        except ValidationError as e:
            raise SnapshotError(
                "Snapshot violates store invariants",
                path=str(self.path),
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

    def load(self) -> StoreSnapshot | None:
        """
        Load the snapshot, treating any problem as "no snapshot".

        An unusable file is renamed to ``<name>.json.corrupt`` so a later save
        cannot overwrite it.
        """
        try:
            return self.load_strict()
        except SnapshotError as e:
            quarantined = self._quarantine()
            logger.warning(
                "Snapshot unusable; starting with an empty store",
                path=str(self.path),
                error=e.message,
                quarantined_to=str(quarantined) if quarantined else None,
            )
            return None

    def save(self, snapshot: StoreSnapshot) -> bool:
        """
        Write the snapshot, replacing the file atomically.

        Returns:
            True on success, False if validation or the write failed.
        """
        payload: dict[str, Any] = {"version": self.version, "state": snapshot.to_wire()}

        errors = snapshot_payload_errors(payload)
        if errors:
            logger.error("Aborting snapshot save due to schema validation failure", path=str(self.path), errors=errors)
            return False

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Error saving snapshot", path=str(self.path), error=str(e))
            return False

        logger.debug("Snapshot saved", path=str(self.path), units=len(snapshot.units))
        return True

    def clear(self) -> bool:
        """Delete the snapshot file. False if there was none."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        logger.info("Snapshot deleted", path=str(self.path))
        return True

    def attach(self, store: InventoryStore) -> Callable[[], None]:
        """
        Save the snapshot after every settled store mutation.

        Returns:
            A callable that detaches the autosave listener.
        """

        def autosave(operation: str, snapshot: StoreSnapshot) -> None:
            if not self.save(snapshot):
                logger.warning("Autosave failed", operation=operation, path=str(self.path))

        return store.subscribe(autosave)

    def _quarantine(self) -> Path | None:
        if not self.path.exists():
            return None
        target = self.path.with_name(self.path.name + ".corrupt")
        try:
            os.replace(self.path, target)
        except OSError as e:
            logger.error("Could not move unusable snapshot aside", path=str(self.path), error=str(e))
            return None
        return target
