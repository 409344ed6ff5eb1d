"""Store and retrieval configuration."""

from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Optional


DEFAULT_FIELD_NAME = "unnamed"


@dataclass(frozen=True)
class StoreConfig:
    """Defaults applied when a store is created."""

    default_field_name: str = DEFAULT_FIELD_NAME


@dataclass(frozen=True)
class RetrievalConfig:
    """Random source configuration for sampling retrievals."""

    seed: Optional[int] = None

    def make_rng(self) -> random.Random:
        if self.seed is None:
            return random.Random()
        return random.Random(self.seed)
