"""Common position fields for all descriptors."""

from __future__ import annotations

from pydantic import BaseModel

UNSET = -1


class BaseDescr(BaseModel):
    """
    Base class for every AST node.

    Offsets index into the source text; ``end_offset`` is exclusive so
    ``source[d.start_offset:d.end_offset]`` is the node's span. ``line`` is
    1-indexed and ``column`` 0-indexed. All four default to -1 (unset).
    """

    start_offset: int = UNSET
    end_offset: int = UNSET
    line: int = UNSET
    column: int = UNSET

    @property
    def has_location(self) -> bool:
        return self.start_offset != UNSET and self.end_offset != UNSET

    def span(self, source: str) -> str:
        """Return the source text covered by this node."""
        if not self.has_location:
            return ""
        return source[self.start_offset : self.end_offset]
