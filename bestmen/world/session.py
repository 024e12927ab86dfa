"""
Game session - the world-side owner of persistent player state.

The session wires the dialogue interpreter and the battle system
together: battle exits start encounters, reward exits and won fights
fill the inventory, and a full set of quest items summons the final
boss.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Optional

from bestmen_engine.core import DiceRoller, EventBus, GameConfig
from bestmen.components import Inventory
from bestmen.battle import (
    BattleSystem,
    EncounterRequest,
    EncounterState,
    TerminalReport,
    create_combatant,
)
from bestmen.catalog import Catalog
from bestmen.dialog import DialogueExit, DialogueInterpreter, DialogueStep
from bestmen.errors import CatalogError, EncounterError
from bestmen.world.npc import Npc

logger = logging.getLogger(__name__)

QUEST_ITEMS = ("wedding_band", "something_blue", "wedding_veil")
FINAL_BOSS_ID = "bridezilla"


class InventoryEvent(Enum):
    """Events published when the inventory changes."""
    ITEM_ADDED = auto()


class GameSession:
    """
    One playthrough with a chosen character.

    Player HP persists between encounters; statuses and stat
    multipliers do not, because each fight works on a copy.
    """

    def __init__(
        self,
        catalog: Catalog,
        character_id: str,
        config: Optional[GameConfig] = None,
        events: Optional[EventBus] = None,
        dice: Optional[DiceRoller] = None,
    ):
        self.catalog = catalog
        self.config = config or GameConfig()
        self.events = events or EventBus()
        self.dice = dice or DiceRoller(self.config.seed)

        self.player = create_combatant(catalog.character(character_id))
        self.inventory = Inventory()
        self.npcs: dict[str, Npc] = {}
        for tree in catalog.dialogues.values():
            self.add_npc(Npc(ref=tree.id, name=tree.speaker, dialogue_id=tree.id))

        self.battle = BattleSystem(catalog, self.events, self.config, self.dice)
        self.battle.on_battle_end(self.apply_report)
        self.dialogue = DialogueInterpreter(
            catalog, self.player, self.inventory, self.events, self.dice
        )

        self.pending_encounter: Optional[EncounterRequest] = None
        self._boss_issued = False

        logger.info("Session started as %s", self.player.display_name)

    def add_npc(self, npc: Npc) -> None:
        self.npcs[npc.ref] = npc

    def npc(self, npc_ref: str) -> Npc:
        try:
            return self.npcs[npc_ref]
        except KeyError:
            raise CatalogError(f"unknown NPC {npc_ref!r}") from None

    # Dialogue

    def talk_to(self, npc_ref: str) -> Optional[DialogueStep]:
        """Open a conversation; ignored while a fight is running."""
        npc = self.npc(npc_ref)
        if self.battle.in_progress:
            logger.warning("Cannot talk to %s during a fight", npc.name)
            return None
        return self.dialogue.start(self.catalog.dialogue(npc.dialogue_id), npc.ref)

    def choose(self, index: int) -> Optional[DialogueStep]:
        """
        Pick a dialogue reply and act on whatever exit it reaches.

        A battle exit starts the encounter straight away; a reward exit
        has already put the item in the inventory.
        """
        npc_ref = self.dialogue.npc_ref
        step = self.dialogue.choose(index)
        if step is None or not step.finished:
            return step

        self.npcs[npc_ref].spent = True
        if step.exit is DialogueExit.ITEM_ACQUIRED:
            self._item_added(step.item_id)
        elif step.exit is DialogueExit.ENCOUNTER_REQUEST:
            self.begin_encounter(step.encounter)
        return step

    # Battle

    def begin_encounter(self, request: EncounterRequest) -> EncounterState:
        """
        Start a fight, discarding a finished one that is still loaded.

        Raises:
            EncounterError: A fight is in progress or the player has fainted
        """
        if self.battle.is_active and not self.battle.in_progress:
            self.battle.end_battle()
        return self.battle.start(request)

    def begin_pending_encounter(self) -> Optional[EncounterState]:
        """Start the queued final-boss fight, if there is one."""
        request = self.pending_encounter
        if request is None:
            return None
        state = self.begin_encounter(request)
        self.pending_encounter = None
        return state

    def apply_report(self, report: TerminalReport) -> None:
        """Persist the outcome of a fight into the session."""
        self.player.hp = report.final_player_hp
        for item_id in report.rewards_granted:
            self.inventory.push(item_id)
            self._item_added(item_id)
        logger.info(
            "Fight against %s ended (%s), player at %d/%d HP",
            report.source_ref,
            report.outcome.value,
            self.player.hp,
            self.player.max_hp,
        )

    def revive(self) -> None:
        """Restore the player to full HP between fights."""
        if self.battle.in_progress:
            raise EncounterError("cannot revive during a fight")
        self.player.heal(self.player.max_hp)

    # Quest

    def _item_added(self, item_id: str) -> None:
        self.events.publish(InventoryEvent.ITEM_ADDED, item_id=item_id, count=self.inventory.count)
        self._check_quest()

    def _check_quest(self) -> None:
        if self._boss_issued or not self.inventory.all(QUEST_ITEMS):
            return
        self._boss_issued = True
        self.pending_encounter = self.battle.request_encounter(
            self.player, FINAL_BOSS_ID, source_ref=FINAL_BOSS_ID
        )
        logger.info("All quest items collected, %s awaits", FINAL_BOSS_ID)

    @property
    def quest_complete(self) -> bool:
        return self.inventory.all(QUEST_ITEMS)
