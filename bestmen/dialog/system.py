"""
Dialogue interpreter - walks an NPC's conversation tree.

A conversation ends in one of three ways: a battle (an EncounterRequest
for the battle system), a reward (the item goes straight into the
inventory), or a plain goodbye. Any of them leaves the NPC spent; a
spent NPC only answers with a dismissal line from then on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from bestmen_engine.core import DiceRoller, EventBus
from bestmen.components import Combatant, DialogueNode, DialogueTree, Inventory
from bestmen.battle.system import EncounterRequest

if TYPE_CHECKING:
    from bestmen.catalog import Catalog

logger = logging.getLogger(__name__)

DISMISSAL_LINES = (
    "I've said everything I'm going to say to you.",
    "Don't you have a wedding to rescue?",
    "Go bother the Drunk Uncle. He loves attention.",
    "We're done here. Emotionally and legally.",
    "*pretends to take an urgent phone call*",
)


class DialogueEvent(Enum):
    """Events published by the interpreter."""
    STARTED = auto()
    NODE_CHANGED = auto()
    ITEM_ACQUIRED = auto()
    BATTLE_REQUESTED = auto()
    ENDED = auto()


class DialogueExit(Enum):
    """How a conversation finished."""
    ENCOUNTER_REQUEST = auto()
    ITEM_ACQUIRED = auto()
    ENDED = auto()


@dataclass
class DialogueStep:
    """What the presentation layer should show after an input."""
    text: str
    node: Optional[DialogueNode] = None
    exit: Optional[DialogueExit] = None
    item_id: Optional[str] = None
    encounter: Optional[EncounterRequest] = None
    dismissed: bool = False

    @property
    def finished(self) -> bool:
        return self.exit is not None


def foe_id_for(name: str) -> str:
    """Catalog id of the foe an NPC turns into: 'Drunk Uncle' -> 'drunk_uncle'."""
    return "_".join(name.lower().split())


class DialogueInterpreter:
    """
    Runs one conversation at a time.

    Handles:
    - Entering a tree at its first node
    - Following choices to other nodes
    - Battle, reward and end exits
    - Spent NPCs and their dismissal lines
    """

    def __init__(
        self,
        catalog: Catalog,
        player: Combatant,
        inventory: Inventory,
        events: Optional[EventBus] = None,
        dice: Optional[DiceRoller] = None,
        dismissals: tuple[str, ...] = DISMISSAL_LINES,
    ):
        self.catalog = catalog
        self.player = player
        self.inventory = inventory
        self.events = events or EventBus()
        self.dice = dice or DiceRoller()
        self.dismissals = dismissals

        self._spent: set[str] = set()
        self._tree: Optional[DialogueTree] = None
        self._node: Optional[DialogueNode] = None
        self._npc_ref: Optional[str] = None

    def start(self, tree: DialogueTree, npc_ref: str) -> DialogueStep:
        """Begin talking to an NPC, or get brushed off if it is spent."""
        if npc_ref in self._spent:
            line = self.dice.choose(self.dismissals)
            return DialogueStep(text=f"{tree.speaker}: {line}", dismissed=True)

        self._tree = tree
        self._npc_ref = npc_ref
        self._node = tree.entry
        self.events.publish(DialogueEvent.STARTED, npc_ref=npc_ref, dialogue_id=tree.id)
        return self._show(self._node)

    def choose(self, index: int) -> Optional[DialogueStep]:
        """
        Pick a reply on the current node.

        Out-of-range indices, links to unknown nodes and battle exits
        taken by a fainted player leave the conversation where it is.
        """
        if self._node is None:
            logger.warning("Choice %d made with no active dialogue", index)
            return None
        if not 0 <= index < len(self._node.choices):
            logger.warning("Choice %d out of range on node %s", index, self._node.id)
            return self._show(self._node)

        choice = self._node.choices[index]
        tree = self._tree
        npc_ref = self._npc_ref

        if choice.starts_battle and self.player.is_fainted:
            logger.warning("%s has fainted; %s will not fight", self.player.display_name, tree.speaker)
            return self._show(self._node)

        if choice.starts_battle:
            request = EncounterRequest(
                player=self.player,
                foe=self.catalog.foe(foe_id_for(tree.speaker)),
                source_ref=npc_ref,
            )
            self.events.publish(DialogueEvent.BATTLE_REQUESTED, npc_ref=npc_ref, foe=request.foe.id)
            self._close()
            return DialogueStep(
                text=f"{tree.speaker}: {choice.text}",
                exit=DialogueExit.ENCOUNTER_REQUEST,
                encounter=request,
            )

        if choice.reward is not None:
            self.inventory.push(choice.reward)
            self.events.publish(DialogueEvent.ITEM_ACQUIRED, npc_ref=npc_ref, item_id=choice.reward)
            self._close()
            return DialogueStep(
                text=f"{tree.speaker}: You got {choice.reward}!",
                exit=DialogueExit.ITEM_ACQUIRED,
                item_id=choice.reward,
            )

        if choice.ends:
            self._close()
            return DialogueStep(text="", exit=DialogueExit.ENDED)

        node = tree.find(choice.next)
        if node is None:
            logger.warning("Dialogue %s: no node %r, staying on %s", tree.id, choice.next, self._node.id)
            return self._show(self._node)

        self._node = node
        self.events.publish(DialogueEvent.NODE_CHANGED, npc_ref=npc_ref, node_id=node.id)
        return self._show(node)

    def _show(self, node: DialogueNode) -> DialogueStep:
        return DialogueStep(text=f"{self._tree.speaker}: {node.text}", node=node)

    def _close(self) -> None:
        npc_ref = self._npc_ref
        self.mark_spent(npc_ref)
        self._tree = None
        self._node = None
        self._npc_ref = None
        self.events.publish(DialogueEvent.ENDED, npc_ref=npc_ref)

    def mark_spent(self, npc_ref: str) -> None:
        self._spent.add(npc_ref)

    def is_spent(self, npc_ref: str) -> bool:
        return npc_ref in self._spent

    @property
    def is_active(self) -> bool:
        return self._node is not None

    @property
    def current_node(self) -> Optional[DialogueNode]:
        return self._node

    @property
    def npc_ref(self) -> Optional[str]:
        return self._npc_ref
