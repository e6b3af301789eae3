# pagewalk/walker/models.py
"""
Data models for the PageWalk walker.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Hashable, Optional, Tuple


@dataclass(slots=True, frozen=True)
class Page:
    """One fetched page: its items in source order and the locator of the next page.

    ``next_locator`` set to ``None`` marks the last page of the stream.
    """

    items: Tuple[Any, ...]
    next_locator: Optional[Hashable] = None

    def __post_init__(self) -> None:
        # items are fixed at fetch time
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))


@dataclass(slots=True, frozen=True)
class FeedEntry:
    """A single RSS item or Atom entry."""

    id: str
    title: str
    link: str
    updated: str

    def as_dict(self) -> dict[str, str]:
        return asdict(self)
