"""Fact types and field schema."""

from factbase.ir.types import Fact, FactId, fact_key, index_key, own_fact
from factbase.ir.schema import FieldSchema

__all__ = [
    "Fact",
    "FactId",
    "FieldSchema",
    "fact_key",
    "index_key",
    "own_fact",
]
