"""Events package."""

from gamecore.events.game_events import (
    SYSTEM_PLAYER_ID,
    # Base
    GameActionType,
    GameAction,
    BaseGameAction,
    ActionRecord,
    # Lifecycle
    GameStarted,
    GameEnded,
    TurnStarted,
    TurnEnded,
    PlayerJoined,
    PlayerLeft,
    # Game specific
    PlayerAction,
    CustomEvent,
)
from gamecore.events.event_formatter import EventFormatter
from gamecore.events.event_log import EventLog
from gamecore.events.dispatcher import GameEventDispatcher, GameEventListener

__all__ = [
    "SYSTEM_PLAYER_ID",
    # Base
    "GameActionType",
    "GameAction",
    "BaseGameAction",
    "ActionRecord",
    # Lifecycle
    "GameStarted",
    "GameEnded",
    "TurnStarted",
    "TurnEnded",
    "PlayerJoined",
    "PlayerLeft",
    # Game specific
    "PlayerAction",
    "CustomEvent",
    # Logs
    "EventFormatter",
    "EventLog",
    "GameEventDispatcher",
    "GameEventListener",
]
