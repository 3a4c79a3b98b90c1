"""gamecore - turn rotation, lifecycle and event log for turn-based games."""

from gamecore.exceptions import (
    GameError,
    InvalidArgumentError,
    InvalidGameStateError,
    InvalidPlayerActionError,
    GameRuleViolationError,
    PlayerNotFoundError,
    DuplicatePlayerError,
    GameCapacityExceededError,
)
from gamecore.models import Player, PlayerStatus, Turn, TurnStatus
from gamecore.events import (
    GameActionType,
    GameAction,
    BaseGameAction,
    PlayerAction,
    CustomEvent,
    GameEventDispatcher,
    GameEventListener,
    EventLog,
)
from gamecore.engine import (
    BaseGame,
    BaseGameRules,
    GameRules,
    GameState,
    GameStatus,
    PlayerManager,
    TurnManager,
)

__all__ = [
    # Errors
    "GameError",
    "InvalidArgumentError",
    "InvalidGameStateError",
    "InvalidPlayerActionError",
    "GameRuleViolationError",
    "PlayerNotFoundError",
    "DuplicatePlayerError",
    "GameCapacityExceededError",
    # Models
    "Player",
    "PlayerStatus",
    "Turn",
    "TurnStatus",
    # Events
    "GameActionType",
    "GameAction",
    "BaseGameAction",
    "PlayerAction",
    "CustomEvent",
    "GameEventDispatcher",
    "GameEventListener",
    "EventLog",
    # Engine
    "BaseGame",
    "BaseGameRules",
    "GameRules",
    "GameState",
    "GameStatus",
    "PlayerManager",
    "TurnManager",
]
