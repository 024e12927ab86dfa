"""
Dialogue components - conversation trees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

BATTLE = "battle"
END = "end"


@dataclass
class DialogueChoice:
    """A single reply option."""
    text: str
    next: Optional[str] = None   # node id, "battle" or "end"
    reward: Optional[str] = None
    battle: bool = False

    @property
    def starts_battle(self) -> bool:
        return self.battle or self.next == BATTLE

    @property
    def ends(self) -> bool:
        return self.next is None or self.next == END


@dataclass
class DialogueNode:
    """A line of dialogue and the replies to it."""
    id: str
    text: str = ""
    choices: list[DialogueChoice] = field(default_factory=list)

    @property
    def has_choices(self) -> bool:
        return len(self.choices) > 0


@dataclass
class DialogueTree:
    """
    All nodes of one NPC conversation.

    The first node is the entry point. Node ids are looked up by a
    linear scan in array order.
    """
    id: str
    speaker: str
    nodes: list[DialogueNode] = field(default_factory=list)

    @property
    def entry(self) -> DialogueNode:
        return self.nodes[0]

    def find(self, node_id: str) -> Optional[DialogueNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def __len__(self) -> int:
        return len(self.nodes)
