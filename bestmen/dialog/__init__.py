"""
Dialog module - NPC conversation trees.

Provides:
- Tree parsing and termination checks
- The interpreter that turns choices into battles, rewards or goodbyes
"""

from bestmen.dialog.parser import parse_dialogue, check_termination, is_exit
from bestmen.dialog.system import (
    DialogueInterpreter,
    DialogueEvent,
    DialogueExit,
    DialogueStep,
    DISMISSAL_LINES,
    foe_id_for,
)

__all__ = [
    "parse_dialogue",
    "check_termination",
    "is_exit",
    "DialogueInterpreter",
    "DialogueEvent",
    "DialogueExit",
    "DialogueStep",
    "DISMISSAL_LINES",
    "foe_id_for",
]
