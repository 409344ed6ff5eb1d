"""Predicate-driven retrieval over a fact store."""

from __future__ import annotations

import inspect
import logging
import random
from typing import Any, Callable, Iterable, Iterator, Optional

from factbase.config import RetrievalConfig
from factbase.errors import (
    ArityMismatchError,
    EmptyResultError,
    PredicateError,
    SampleSizeExceededError,
    UnknownFieldError,
)
from factbase.ir.types import Fact, FactId
from factbase.store.indexed import IndexedFactStore


logger = logging.getLogger("factbase.retrieval")

Predicate = Callable[..., Any]


class PredicateRetrieval:
    """Linear scan of a store's live facts filtered by a predicate.

    The predicate is called with the values of ``fields`` in order, one
    positional argument per field. Only a result that is exactly ``True``
    counts as a match. When ``output_fields`` is given, results returned by
    ``scan_all`` and the sampling methods are projected to those fields.
    """

    def __init__(
        self,
        store: IndexedFactStore,
        predicate: Predicate,
        fields: Iterable[str] | str,
        output_fields: Iterable[str] | str | None = None,
        *,
        rng: Optional[random.Random] = None,
        config: Optional[RetrievalConfig] = None,
    ) -> None:
        if not isinstance(store, IndexedFactStore):
            raise TypeError(f"not a factbase: {store!r}")
        if not callable(predicate):
            raise TypeError(f"not a predicate: {predicate!r}")
        self.store = store
        self.predicate = predicate
        self.fields = _as_names(fields)
        self.output_fields = None if output_fields is None else _as_names(output_fields)

        arity = _positional_arity(predicate)
        if arity is not None and not arity[0] <= len(self.fields) <= arity[1]:
            raise ArityMismatchError(
                f"the condition has {arity[1]} arguments but there are "
                f"{len(self.fields)} fields specified to match them"
            )
        self._field_positions = self._positions(self.fields)
        self._output_positions = (
            None if self.output_fields is None else self._positions(self.output_fields)
        )
        self.config = config or RetrievalConfig()
        self.rng = rng if rng is not None else self.config.make_rng()
        logger.debug(
            "retrieval bound to field positions %s, output positions %s",
            self._field_positions,
            self._output_positions,
        )

    def scan_all(self) -> list[Fact]:
        """All matching facts in id order, projected to the output fields."""

        return [self._project(fact) for _, fact in self._matches()]

    def scan_first(self) -> Optional[Fact]:
        """The first matching fact, unprojected, or None."""

        for _, fact in self._matches():
            return fact
        return None

    def exists(self) -> bool:
        return self.scan_first() is not None

    def count(self) -> int:
        return sum(1 for _ in self._matches())

    def sample_one(self) -> Fact:
        results = self.scan_all()
        if not results:
            raise EmptyResultError("no facts satisfy the condition")
        return results[self.rng.randrange(len(results))]

    def sample_n(self, n: int) -> list[Fact]:
        """Draw ``n`` distinct matching facts without replacement.

        Each draw removes a uniformly chosen position from the remaining
        candidates; the result follows draw order.
        """

        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"n must be int: {n!r}")
        if n < 0:
            raise ValueError(f"n must be non-negative: {n}")
        results = self.scan_all()
        if not results or n > len(results):
            raise SampleSizeExceededError(
                f"cannot pick {n} facts from {len(results)} facts satisfying the condition"
            )
        possible = list(range(len(results)))
        chosen: list[int] = []
        for _ in range(n):
            index = self.rng.randrange(len(possible))
            chosen.append(possible.pop(index))
        logger.debug("sampled positions %s of %d matches", chosen, len(results))
        return [results[index] for index in chosen]

    def retract_matching(self) -> int:
        """Retract every matching fact; return how many were retracted."""

        selected = [fact for _, fact in self._matches()]
        retracted = 0
        for fact in selected:
            if self.store.contains_fact(fact) is None:
                continue
            self.store.retract_fact(fact)
            if self.store.contains_fact(fact) is None:
                retracted += 1
        logger.debug("retracted %d of %d matching facts", retracted, len(selected))
        return retracted

    def _matches(self) -> Iterator[tuple[FactId, Fact]]:
        for fact_id, fact in self.store.iter_live():
            values = [fact[position] for position in self._field_positions]
            try:
                result = self.predicate(*values)
            except Exception as exc:
                raise PredicateError(
                    f"condition failed on fact {fact_id} {fact!r}: {exc}"
                ) from exc
            logger.debug("fact %d values %r -> %r", fact_id, values, result)
            if isinstance(result, bool) and result:
                yield fact_id, self.store.retrieve_fact(fact_id)

    def _project(self, fact: Fact) -> Fact:
        if self._output_positions is None:
            return fact
        return tuple(fact[position] for position in self._output_positions)

    def _positions(self, names: list[str]) -> list[int]:
        positions: list[int] = []
        for name in names:
            position = self.store.field_index(name)
            if position is None:
                raise UnknownFieldError(
                    f"{name} is not defined as a field in the factbase "
                    f"{list(self.store.field_names)}"
                )
            positions.append(position)
        return positions


def _as_names(fields: Iterable[str] | str) -> list[str]:
    if isinstance(fields, str):
        return [fields]
    names = list(fields)
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"field names must be strings: {name!r}")
    return names


def _positional_arity(predicate: Predicate) -> Optional[tuple[int, int]]:
    """Required and total positional parameters, or None when any count is accepted."""

    try:
        signature = inspect.signature(predicate)
    except (TypeError, ValueError):
        return None
    required = 0
    total = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            total += 1
            if param.default is inspect.Parameter.empty:
                required += 1
    return required, total
