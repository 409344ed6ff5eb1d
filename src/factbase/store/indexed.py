"""Indexed in-memory fact base with stable fact ids."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any, Hashable, Iterable, Iterator, Optional

from factbase.config import StoreConfig
from factbase.errors import (
    ArityMismatchError,
    IndexCorruptionError,
    InvalidIdError,
    SnapshotError,
)
from factbase.ir.schema import FieldSchema
from factbase.ir.types import Fact, FactId, fact_key, own_fact


logger = logging.getLogger("factbase.store")

FieldIndex = dict[Hashable, dict[FactId, None]]


class IndexedFactStore:
    """A set of fixed-arity facts with one inverted index per field.

    Every asserted fact receives the next integer id, starting at 0. Ids are
    never reused: retracting a fact leaves a tombstone in its log slot, and
    asserting the same values again yields a new, larger id. The indices map
    each field value to the ids of the live facts holding it and are only used
    for exact-match lookups.
    """

    def __init__(
        self,
        field_names: Iterable[str] | None = None,
        config: Optional[StoreConfig] = None,
    ) -> None:
        self.config = config or StoreConfig()
        self.schema = FieldSchema.from_names(field_names, self.config)
        self._indices: list[FieldIndex] = [{} for _ in self.schema.names]
        self._log: list[Optional[Fact]] = []
        self._tombstones: set[FactId] = set()
        self._next_id: FactId = 0

    @property
    def field_names(self) -> tuple[str, ...]:
        return self.schema.names

    @property
    def arity(self) -> int:
        return self.schema.arity

    @property
    def next_id(self) -> FactId:
        return self._next_id

    def size(self) -> int:
        return len(self._log) - len(self._tombstones)

    def __len__(self) -> int:
        return self.size()

    def field_index(self, name: str) -> Optional[int]:
        return self.schema.index_of(name)

    def is_retracted(self, fact_id: FactId) -> bool:
        return fact_id in self._tombstones

    def retracted_ids(self) -> list[FactId]:
        return sorted(self._tombstones)

    def assert_fact(self, fact: Sequence[Any]) -> FactId:
        """Add ``fact`` unless an equal fact is already live; return its id."""

        self._check_arity(fact)
        existing = self.contains_fact(fact)
        if existing is not None:
            return existing
        stored = own_fact(fact)
        keys = fact_key(stored)
        fact_id = self._next_id
        for field, key in zip(self._indices, keys):
            ids = field.get(key)
            if ids is None:
                ids = {}
                field[key] = ids
            ids[fact_id] = None
        self._log.append(stored)
        self._next_id += 1
        logger.debug("adding fact %d: %r", fact_id, stored)
        return fact_id

    def assert_all(self, facts: Iterable[Sequence[Any]]) -> list[FactId]:
        return [self.assert_fact(fact) for fact in facts]

    def retract_fact(self, fact: Sequence[Any]) -> None:
        """Remove ``fact`` if present; its id is tombstoned, never renumbered."""

        self._check_arity(fact)
        fact_id = self.contains_fact(fact)
        if fact_id is None:
            logger.debug("nothing to retract for %r", tuple(fact))
            return
        for field, key in zip(self._indices, fact_key(fact)):
            ids = field[key]
            del ids[fact_id]
            if not ids:
                del field[key]
        self._log[fact_id] = None
        self._tombstones.add(fact_id)
        logger.debug("retracted fact %d: %r", fact_id, tuple(fact))

    def contains_fact(self, fact: Sequence[Any]) -> Optional[FactId]:
        """Return the id of the live fact equal to ``fact``, or None."""

        self._check_arity(fact)
        if not self._indices[0]:
            return None
        keys = fact_key(fact)
        candidates = dict(self._indices[0].get(keys[0], {}))
        position = 1
        while candidates and position < len(keys):
            ids = self._indices[position].get(keys[position], {})
            candidates = {fact_id: None for fact_id in candidates if fact_id in ids}
            position += 1
        logger.debug("containment candidates for %r: %s", tuple(fact), list(candidates))
        if not candidates:
            return None
        if len(candidates) == 1:
            return next(iter(candidates))
        logger.error(
            "index intersection for %r resolved to ids %s", tuple(fact), list(candidates)
        )
        raise IndexCorruptionError(
            f"found more than one fact like {tuple(fact)!r} in the factbase: {list(candidates)}"
        )

    def member(self, fact: Sequence[Any]) -> bool:
        return self.contains_fact(fact) is not None

    def __contains__(self, fact: object) -> bool:
        if not _is_fact_like(fact) or len(fact) != self.arity:
            return False
        return self.contains_fact(fact) is not None

    def retrieve_fact(self, fact_id: FactId) -> Fact:
        if isinstance(fact_id, bool) or not isinstance(fact_id, int):
            raise TypeError(f"fact id must be int: {fact_id!r}")
        if fact_id < 0 or fact_id >= self._next_id:
            raise InvalidIdError(f"not a valid fact id: {fact_id}")
        if fact_id in self._tombstones:
            raise InvalidIdError(f"the fact with id {fact_id} was retracted")
        stored = self._log[fact_id]
        if stored is None:  # pragma: no cover - tombstones and log slots move together
            raise InvalidIdError(f"the fact with id {fact_id} was retracted")
        return own_fact(stored)

    def iter_live(self) -> Iterator[tuple[FactId, Fact]]:
        """Yield ``(id, fact)`` for live facts in id order."""

        for fact_id, stored in enumerate(self._log):
            if stored is not None:
                yield fact_id, stored

    def index_entries(self, position: int) -> list[tuple[Any, list[FactId]]]:
        """Return ``(value, ids)`` pairs of one field index in insertion order."""

        field = self._indices[position]
        entries: list[tuple[Any, list[FactId]]] = []
        for ids in field.values():
            first = next(iter(ids))
            stored = self._log[first]
            value = stored[position] if stored is not None else None
            entries.append((value, list(ids)))
        return entries

    def export_all(self) -> tuple[list[str], list[Fact]]:
        return self.schema.to_list(), [own_fact(fact) for _, fact in self.iter_live()]

    @classmethod
    def import_all(
        cls,
        field_names: Iterable[str],
        facts: Iterable[Sequence[Any]],
        config: Optional[StoreConfig] = None,
    ) -> "IndexedFactStore":
        store = cls(field_names, config=config)
        store.assert_all(facts)
        return store

    def to_list(self) -> list[Any]:
        """Flatten to ``[field_names, fact, ...]``."""

        names, facts = self.export_all()
        return [names, *[list(fact) for fact in facts]]

    @classmethod
    def from_list(
        cls, rows: Sequence[Any], config: Optional[StoreConfig] = None
    ) -> "IndexedFactStore":
        if not _is_fact_like(rows) or not rows:
            raise SnapshotError("expected a list whose first entry is the list of field names")
        names = rows[0]
        if not _is_fact_like(names):
            raise SnapshotError(f"first entry must be the list of field names: {names!r}")
        return cls.import_all(names, rows[1:], config=config)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexedFactStore):
            return NotImplemented
        if self.size() != other.size():
            return False
        if not self.schema.same_structure(other.schema):
            return False
        return all(other.contains_fact(fact) is not None for _, fact in self.iter_live())

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        from factbase.mappers.text import TextRenderer

        return TextRenderer().render_store(self)

    def __repr__(self) -> str:
        return f"IndexedFactStore(fields={list(self.field_names)!r}, size={self.size()})"

    def _check_arity(self, fact: Sequence[Any]) -> None:
        if not _is_fact_like(fact):
            raise TypeError(f"a fact must be a list or tuple of values: {fact!r}")
        if len(fact) != self.arity:
            raise ArityMismatchError(
                f"facts for this factbase have to consist of {self.arity} fields, got {len(fact)}"
            )


def _is_fact_like(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
