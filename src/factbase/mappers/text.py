"""Plain-text rendering of fact bases for debugging output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from factbase.store.indexed import IndexedFactStore


RULE = "-" * 57


@dataclass(frozen=True)
class TextRenderer:
    """Render stores, facts and field indices as text."""

    title: str = "FactBase"

    def render_store(self, store: "IndexedFactStore") -> str:
        header = " ".join(f"<{name}>" for name in store.field_names)
        lines = [f"{self.title}: ( {header} )", RULE]
        for fact_id, fact in store.iter_live():
            lines.append(f"{fact_id}: {self.render_fact(fact)}")
        return "\n".join(lines)

    def render_fact(self, fact: Sequence[Any]) -> str:
        parts = [self.render_value(value) for value in fact]
        return "( " + " ".join(parts) + " )" if parts else "( )"

    def render_value(self, value: Any) -> str:
        if isinstance(value, (list, tuple, set, frozenset)):
            items = [self.render_value(item) for item in value]
            return "[ " + " ".join(items) + " ]" if items else "[ ]"
        return str(value)

    def render_index(self, store: "IndexedFactStore", position: int) -> str:
        if position < 0 or position >= store.arity:
            raise IndexError(f"no field at position {position}")
        lines = [f"Field {position} <{store.field_names[position]}>"]
        for value, ids in store.index_entries(position):
            lines.append(f"{self.render_value(value)} | ( {' '.join(str(i) for i in ids)} )")
        return "\n".join(lines)
