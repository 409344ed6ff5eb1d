"""Custom exceptions for the fact base."""

from __future__ import annotations


class FactBaseError(Exception):
    """Base exception for fact base failures."""


class SchemaError(FactBaseError):
    """Raised when a field schema definition is invalid."""


class ArityMismatchError(FactBaseError):
    """Raised when a fact or a predicate binding has the wrong number of fields."""


class UnknownFieldError(FactBaseError):
    """Raised when a field name is not defined in the schema."""


class InvalidIdError(FactBaseError):
    """Raised when a fact id was never assigned or has been retracted."""


class FactValueError(FactBaseError):
    """Raised when a fact value cannot be indexed."""


class IndexCorruptionError(FactBaseError):
    """Raised when the field indices resolve a fact to more than one id."""


class PredicateError(FactBaseError):
    """Raised when a retrieval predicate fails while being evaluated."""


class EmptyResultError(FactBaseError):
    """Raised when a sample is requested from an empty match set."""


class SampleSizeExceededError(FactBaseError):
    """Raised when more facts are requested than the match set holds."""


class SnapshotError(FactBaseError):
    """Raised when exported fact base data cannot be restored."""
