"""Fact value types and index key canonicalisation."""

from __future__ import annotations

import copy
from typing import Any, Hashable, Sequence

from factbase.errors import FactValueError


Fact = tuple[Any, ...]
FactId = int

_BOOL = object()
_LIST = object()
_TUPLE = object()
_DICT = object()
_SET = object()

_CONTAINERS = (list, tuple, dict, set)


def index_key(value: Any) -> Hashable:
    """Return a hashable key with the same equality as ``value``.

    Containers are frozen recursively. Booleans are tagged so that ``True``
    and ``1`` index as different values.
    """

    if isinstance(value, bool):
        return (_BOOL, value)
    if isinstance(value, list):
        return (_LIST, tuple(index_key(item) for item in value))
    if isinstance(value, tuple):
        return (_TUPLE, tuple(index_key(item) for item in value))
    if isinstance(value, dict):
        return (_DICT, frozenset((index_key(k), index_key(v)) for k, v in value.items()))
    if isinstance(value, (set, frozenset)):
        return (_SET, frozenset(index_key(item) for item in value))
    try:
        hash(value)
    except TypeError as exc:
        raise FactValueError(
            f"fact values must be hashable or plain containers: {value!r}"
        ) from exc
    return value


def fact_key(fact: Sequence[Any]) -> tuple[Hashable, ...]:
    return tuple(index_key(value) for value in fact)


def own_fact(fact: Sequence[Any]) -> Fact:
    """Copy a fact so that later mutation by the caller cannot reach it."""

    return tuple(copy.deepcopy(value) if isinstance(value, _CONTAINERS) else value for value in fact)
