"""Models package."""

from gamecore.models.player import (
    ELIGIBLE_STATUSES,
    Player,
    PlayerStatus,
)
from gamecore.models.turn import Turn, TurnStatus

__all__ = [
    "ELIGIBLE_STATUSES",
    "Player",
    "PlayerStatus",
    "Turn",
    "TurnStatus",
]
