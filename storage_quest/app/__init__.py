"""Application wiring for Storage Quest."""

from .factory import StoreSession, open_store

__all__ = ["StoreSession", "open_store"]
