"""Fact store implementations."""

from factbase.store.indexed import IndexedFactStore
from factbase.store.snapshot import FactBaseSnapshot, restore_store, snapshot_store

__all__ = [
    "IndexedFactStore",
    "FactBaseSnapshot",
    "restore_store",
    "snapshot_store",
]
