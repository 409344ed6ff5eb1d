"""Validated in-memory snapshots of a fact base."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from factbase.config import StoreConfig
from factbase.errors import SnapshotError
from factbase.store.indexed import IndexedFactStore


class FactBaseSnapshot(BaseModel):
    """Field names plus the live facts of a store, in assertion order."""

    field_names: list[str] = Field(min_length=1)
    facts: list[list[Any]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_shape(self) -> "FactBaseSnapshot":
        seen: set[str] = set()
        for name in self.field_names:
            if not name:
                raise ValueError("field names must be non-empty")
            if name in seen:
                raise ValueError(f"duplicate field name: {name}")
            seen.add(name)
        for idx, fact in enumerate(self.facts):
            if len(fact) != len(self.field_names):
                raise ValueError(
                    f"fact {idx} has {len(fact)} values but the snapshot defines "
                    f"{len(self.field_names)} fields"
                )
        return self


def snapshot_store(store: IndexedFactStore) -> FactBaseSnapshot:
    names, facts = store.export_all()
    return FactBaseSnapshot(field_names=names, facts=[list(fact) for fact in facts])


def restore_store(
    snapshot: FactBaseSnapshot | dict[str, Any],
    config: Optional[StoreConfig] = None,
) -> IndexedFactStore:
    """Rebuild a store by re-asserting every fact of ``snapshot`` in order."""

    if not isinstance(snapshot, FactBaseSnapshot):
        try:
            snapshot = FactBaseSnapshot.model_validate(snapshot)
        except ValidationError as exc:
            raise SnapshotError(f"invalid fact base snapshot: {exc}") from exc
    return IndexedFactStore.import_all(snapshot.field_names, snapshot.facts, config=config)
