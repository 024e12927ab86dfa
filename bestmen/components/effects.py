"""
Effect payloads carried by moves.

An Effect is an ordered list of tagged parts. Each part is one
independent sub-effect (a heal, a chance to confuse, an attack buff,
...), so a single hit can trigger several of them at once. The order of
the list is the order they are applied and narrated in.
"""

from __future__ import annotations

from typing import Annotated, ClassVar, Literal, Optional, Union

from pydantic import Field

from bestmen_engine.core import Component
from bestmen.components.status import StatusKind


class Heal(Component):
    """Immediate HP change on the target (negative values hurt)."""
    kind: Literal["heal"] = "heal"
    amount: int


class Affliction(Component):
    """
    Base for rolled status conditions.

    Attributes:
        chance: Percent chance to land (100 = always)
        duration: Turns to set on success (None = configured default)
    """
    status: ClassVar[StatusKind]
    chance: int = Field(default=100, ge=0, le=100)
    duration: Optional[int] = Field(default=None, ge=1)


class Confuse(Affliction):
    status: ClassVar[StatusKind] = StatusKind.CONFUSE
    kind: Literal["confuse"] = "confuse"


class Skip(Affliction):
    """Flinch. Always a single-turn status."""
    status: ClassVar[StatusKind] = StatusKind.SKIP
    kind: Literal["skip"] = "skip"


class Sleep(Affliction):
    status: ClassVar[StatusKind] = StatusKind.SLEEP
    kind: Literal["sleep"] = "sleep"


class Stun(Affliction):
    status: ClassVar[StatusKind] = StatusKind.STUN
    kind: Literal["stun"] = "stun"


class Bleed(Affliction):
    status: ClassVar[StatusKind] = StatusKind.BLEED
    kind: Literal["bleed"] = "bleed"


class StatModifier(Component):
    """
    Base for timed attack/defense multipliers.

    The affected multiplier is scaled by (1 + sign * percent / 100).
    """
    status: ClassVar[StatusKind]
    stat: ClassVar[str]
    sign: ClassVar[int]
    percent: int = Field(ge=1)
    duration: Optional[int] = Field(default=None, ge=1)

    @property
    def factor(self) -> float:
        return 1 + self.sign * self.percent / 100


class AtkBoost(StatModifier):
    status: ClassVar[StatusKind] = StatusKind.ATK_BOOST
    stat: ClassVar[str] = "attack"
    sign: ClassVar[int] = 1
    kind: Literal["atk_boost"] = "atk_boost"


class DefBoost(StatModifier):
    status: ClassVar[StatusKind] = StatusKind.DEF_BOOST
    stat: ClassVar[str] = "defense"
    sign: ClassVar[int] = 1
    kind: Literal["def_boost"] = "def_boost"


class AtkDebuff(StatModifier):
    status: ClassVar[StatusKind] = StatusKind.ATK_DEBUFF
    stat: ClassVar[str] = "attack"
    sign: ClassVar[int] = -1
    kind: Literal["atk_debuff"] = "atk_debuff"
    # A full 100% cut would zero the multiplier.
    percent: int = Field(ge=1, le=99)


class DefDebuff(StatModifier):
    status: ClassVar[StatusKind] = StatusKind.DEF_DEBUFF
    stat: ClassVar[str] = "defense"
    sign: ClassVar[int] = -1
    kind: Literal["def_debuff"] = "def_debuff"
    percent: int = Field(ge=1, le=99)


class Surrender(Component):
    """Flavor only: the user waves a white flag and nothing changes."""
    kind: Literal["surrender"] = "surrender"


EffectPart = Annotated[
    Union[
        Heal,
        Confuse,
        Skip,
        Sleep,
        Stun,
        Bleed,
        AtkBoost,
        DefBoost,
        AtkDebuff,
        DefDebuff,
        Surrender,
    ],
    Field(discriminator="kind"),
]


class Effect(Component):
    """Ordered sub-effects triggered together by one move."""
    parts: list[EffectPart] = Field(min_length=1)
