"""Game state container shared by every game built on the core."""

from datetime import datetime, timezone
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt, field_validator


class GameStatus(str, Enum):
    """Coarse-grained lifecycle phase of a game."""

    WAITING = "WAITING"  # not started, players are joining
    IN_PROGRESS = "IN_PROGRESS"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


DataT = TypeVar("DataT")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GameState(BaseModel, Generic[DataT]):
    """Lifecycle fields common to all games, plus a game-owned payload.

    Games keep their own state (board, deck, scores...) in `data` instead
    of subclassing, e.g. GameState[DiceRaceData]. Everything here is
    public and serialized, so to_json()/from_json() round-trip exactly.
    """

    model_config = ConfigDict(validate_assignment=True)

    game_id: str = Field(frozen=True)
    status: GameStatus = GameStatus.WAITING
    created_at: datetime = Field(default_factory=_utcnow, frozen=True)
    updated_at: Optional[datetime] = None
    current_round: NonNegativeInt = 0
    max_rounds: Optional[PositiveInt] = None
    data: Optional[DataT] = None

    @field_validator("game_id")
    @classmethod
    def game_id_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Game ID cannot be empty")
        return value

    def mark_updated(self) -> None:
        """Stamp updated_at with the current time."""
        self.updated_at = _utcnow()

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, text: str) -> "GameState[DataT]":
        return cls.model_validate_json(text)
