"""Predicate-driven retrieval."""

from factbase.retrieval.engine import Predicate, PredicateRetrieval

__all__ = [
    "Predicate",
    "PredicateRetrieval",
]
