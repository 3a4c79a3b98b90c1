"""Turn record model."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, PositiveInt


class TurnStatus(str, Enum):
    """Status of a single turn, also used for the turn manager's state."""

    PENDING = "PENDING"  # not started yet
    ACTIVE = "ACTIVE"  # player may act
    COMPLETED = "COMPLETED"
    SKIPPED = "SKIPPED"  # abandoned (timeout or skip)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Turn(BaseModel):
    """One slot of the rotation: who played, when, and how it ended."""

    turn_number: PositiveInt
    player_id: str
    status: TurnStatus = TurnStatus.PENDING
    started_at: datetime = Field(default_factory=_utcnow)
    completed_at: Optional[datetime] = None
    # Free-form record of what happened during the turn
    action_data: Optional[str] = None

    @property
    def is_finished(self) -> bool:
        return self.status in (TurnStatus.COMPLETED, TurnStatus.SKIPPED)

    def activate(self) -> None:
        self.status = TurnStatus.ACTIVE

    def complete(self) -> None:
        self.status = TurnStatus.COMPLETED
        self.completed_at = _utcnow()

    def skip(self) -> None:
        self.status = TurnStatus.SKIPPED
        self.completed_at = _utcnow()
