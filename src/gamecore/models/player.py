"""Player model."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlayerStatus(str, Enum):
    """Where a player stands in the game."""

    ACTIVE = "ACTIVE"
    WAITING = "WAITING"  # waiting for their turn / for the game to start
    DISCONNECTED = "DISCONNECTED"
    ELIMINATED = "ELIMINATED"
    WINNER = "WINNER"


# Statuses that make a player part of a turn rotation
ELIGIBLE_STATUSES = frozenset({PlayerStatus.ACTIVE, PlayerStatus.WAITING})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Player(BaseModel):
    """Represents a player in a game.

    The id is the identity key and must be unique within a roster.
    Status is the only field the core mutates; rosters and turn managers
    share the same instance so a status change is visible to both.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(frozen=True)
    name: str = Field(frozen=True)
    status: PlayerStatus = PlayerStatus.WAITING
    joined_at: datetime = Field(default_factory=_utcnow, frozen=True)
    score: int = 0
    # Game specific data (hand of cards, secret role...), never serialized
    custom_data: Any = Field(default=None, exclude=True)

    @field_validator("id", "name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @property
    def is_eligible(self) -> bool:
        """True if the player can take part in a turn rotation."""
        return self.status in ELIGIBLE_STATUSES

    def to_json(self) -> str:
        """Serialize to an indented JSON snapshot."""
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, text: str) -> "Player":
        return cls.model_validate_json(text)
