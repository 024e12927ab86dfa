"""
Inventory component - collected key items.
"""

from __future__ import annotations

from typing import Iterable

from pydantic import Field

from bestmen_engine.core import Component


class Inventory(Component):
    """
    Ordered list of collected item ids.

    Duplicates are allowed; the same NPC can never hand out an item
    twice because it is spent afterwards.
    """
    items: list[str] = Field(default_factory=list)

    def push(self, item_id: str) -> None:
        """Add an item."""
        self.items = [*self.items, item_id]

    def contains(self, item_id: str) -> bool:
        """Check for a single item."""
        return item_id in self.items

    def all(self, item_ids: Iterable[str]) -> bool:
        """Check that every listed item has been collected."""
        return all(item_id in self.items for item_id in item_ids)

    @property
    def count(self) -> int:
        return len(self.items)
