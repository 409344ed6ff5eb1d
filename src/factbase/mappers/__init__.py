"""Text renderers."""

from factbase.mappers.text import TextRenderer

__all__ = [
    "TextRenderer",
]
