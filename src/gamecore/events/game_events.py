"""Action types dispatched through the event system."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Protocol

from pydantic import BaseModel, Field

from gamecore.models.turn import TurnStatus

# player_id used by events that no single player caused
SYSTEM_PLAYER_ID = "system"


class GameActionType(str, Enum):
    """Discriminant used to filter the event history."""

    GAME_STARTED = "GAME_STARTED"
    GAME_ENDED = "GAME_ENDED"
    TURN_STARTED = "TURN_STARTED"
    TURN_ENDED = "TURN_ENDED"
    PLAYER_ACTION = "PLAYER_ACTION"  # played a card, said a word, rolled...
    PLAYER_JOINED = "PLAYER_JOINED"
    PLAYER_LEFT = "PLAYER_LEFT"
    CUSTOM_EVENT = "CUSTOM_EVENT"  # game specific


class GameAction(Protocol):
    """Anything that can be validated, executed and dispatched.

    The dispatcher treats actions as opaque; only action_type is read,
    to filter the history.
    """

    action_id: str
    action_type: GameActionType
    player_id: str
    timestamp: datetime

    def validate(self, state: Any) -> bool:
        ...

    def execute(self, state: Any) -> None:
        ...


def _new_action_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseGameAction(BaseModel):
    """Base class for all actions and lifecycle events.

    Lifecycle events are always valid and change nothing when executed.
    Game actions override validate() and execute().
    """

    action_id: str = Field(default_factory=_new_action_id)
    action_type: GameActionType
    player_id: str = SYSTEM_PLAYER_ID
    timestamp: datetime = Field(default_factory=_utcnow)

    def validate(self, state: Any) -> bool:
        return True

    def execute(self, state: Any) -> None:
        return None

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(player={self.player_id})"


# ============================================================================
# Lifecycle events
# ============================================================================


class GameStarted(BaseGameAction):
    """The game left the waiting room."""

    action_type: GameActionType = GameActionType.GAME_STARTED
    player_ids: list[str] = Field(default_factory=list)

    def __str__(self) -> str:
        return f"GameStarted(players={len(self.player_ids)})"


class GameEnded(BaseGameAction):
    """The game is over."""

    action_type: GameActionType = GameActionType.GAME_ENDED
    winner_id: Optional[str] = None

    def __str__(self) -> str:
        return f"GameEnded(winner={self.winner_id})"


class TurnStarted(BaseGameAction):
    """A player's turn became active."""

    action_type: GameActionType = GameActionType.TURN_STARTED
    turn_number: int

    def __str__(self) -> str:
        return f"TurnStarted(turn={self.turn_number}, player={self.player_id})"


class TurnEnded(BaseGameAction):
    """A turn was completed or skipped."""

    action_type: GameActionType = GameActionType.TURN_ENDED
    turn_number: int
    status: TurnStatus = TurnStatus.COMPLETED

    def __str__(self) -> str:
        return (
            f"TurnEnded(turn={self.turn_number}, player={self.player_id}, "
            f"status={self.status.value})"
        )


class PlayerJoined(BaseGameAction):
    action_type: GameActionType = GameActionType.PLAYER_JOINED
    player_name: str


class PlayerLeft(BaseGameAction):
    action_type: GameActionType = GameActionType.PLAYER_LEFT


# ============================================================================
# Game specific
# ============================================================================


class PlayerAction(BaseGameAction):
    """Base class for moves made by a player during their turn."""

    action_type: GameActionType = GameActionType.PLAYER_ACTION


class CustomEvent(BaseGameAction):
    """Free-form event for things only one game knows about."""

    action_type: GameActionType = GameActionType.CUSTOM_EVENT
    name: str
    payload: dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        return f"CustomEvent(name={self.name})"


# ============================================================================
# Serializable record
# ============================================================================

_BASE_FIELDS = {"action_id", "action_type", "player_id", "timestamp"}


class ActionRecord(BaseModel):
    """Plain-data copy of a dispatched action, safe to persist and reload.

    Actions themselves may carry behaviour and references; a record keeps
    only the common fields, the class name, and the remaining pydantic
    fields as a JSON-compatible payload.
    """

    action_id: str
    action_type: GameActionType
    player_id: str
    timestamp: datetime
    action_class: str
    payload: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_action(cls, action: GameAction) -> "ActionRecord":
        payload: dict[str, Any] = {}
        if isinstance(action, BaseModel):
            payload = action.model_dump(mode="json", exclude=_BASE_FIELDS)
        return cls(
            action_id=action.action_id,
            action_type=action.action_type,
            player_id=action.player_id,
            timestamp=action.timestamp,
            action_class=type(action).__name__,
            payload=payload,
        )
