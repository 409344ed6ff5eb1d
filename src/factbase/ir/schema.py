"""Field schema definitions and validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from factbase.config import StoreConfig
from factbase.errors import SchemaError


@dataclass(frozen=True)
class FieldSchema:
    """Ordered, immutable list of field names defining a fact's arity.

    Attributes:
        names: Field names in fact order; unique and non-empty.
    """

    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.names, tuple):
            raise SchemaError("Field names must be a tuple.")
        if not self.names:
            raise SchemaError("A schema must define at least one field.")
        seen: set[str] = set()
        for name in self.names:
            if not isinstance(name, str) or not name:
                raise SchemaError(f"Field name must be a non-empty string: {name!r}")
            if name in seen:
                raise SchemaError(f"Duplicate field name: {name}")
            seen.add(name)

    @property
    def arity(self) -> int:
        return len(self.names)

    def index_of(self, name: str) -> Optional[int]:
        try:
            return self.names.index(name)
        except ValueError:
            return None

    def same_structure(self, other: "FieldSchema") -> bool:
        """Field names match position by position, ignoring case."""

        if len(self.names) != len(other.names):
            return False
        return all(a.lower() == b.lower() for a, b in zip(self.names, other.names))

    def to_list(self) -> list[str]:
        return list(self.names)

    @staticmethod
    def from_names(
        names: Iterable[Any] | str | None, config: Optional[StoreConfig] = None
    ) -> "FieldSchema":
        """Build a schema, falling back to the single default field when empty."""

        config = config or StoreConfig()
        if names is None:
            return FieldSchema(names=(config.default_field_name,))
        if isinstance(names, str):
            raise SchemaError("Field names must be a sequence of strings, not a single string.")
        collected = tuple(names)
        if not collected:
            return FieldSchema(names=(config.default_field_name,))
        return FieldSchema(names=collected)
