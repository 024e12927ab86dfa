"""
Game configuration and logging setup.
"""

from __future__ import annotations

import logging


class GameConfig:
    """Tunable rules and pacing for a play session."""

    def __init__(
        self,
        bleed_percent: int = 5,
        confusion_self_hit_chance: int = 30,
        confusion_self_hit_percent: int = 10,
        confusion_recover_chance: int = 50,
        default_status_duration: int = 2,
        foe_reply_delay: float = 1.8,
        seed: int | None = None,
    ):
        if default_status_duration < 1:
            raise ValueError("default_status_duration must be at least 1")
        if foe_reply_delay < 0:
            raise ValueError("foe_reply_delay cannot be negative")

        self.bleed_percent = bleed_percent
        self.confusion_self_hit_chance = confusion_self_hit_chance
        self.confusion_self_hit_percent = confusion_self_hit_percent
        self.confusion_recover_chance = confusion_recover_chance
        self.default_status_duration = default_status_duration
        self.foe_reply_delay = foe_reply_delay
        self.seed = seed

    def __repr__(self) -> str:
        return (
            f"GameConfig(bleed_percent={self.bleed_percent}, "
            f"default_status_duration={self.default_status_duration}, "
            f"foe_reply_delay={self.foe_reply_delay}, seed={self.seed})"
        )


def setup_logging(level: str | int = "INFO") -> None:
    """Configure root logging for scripts and interactive sessions."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
