"""Engine package - turn rotation and game lifecycle."""

from .game_state import GameState, GameStatus
from .player_manager import PlayerManager
from .turn_manager import TurnManager
from .rules import GameRules, BaseGameRules
from .validator import (
    can_start_game,
    count_eligible_players,
    is_game_completed,
    is_game_in_progress,
)
from .base_game import BaseGame

__all__ = [
    "GameState",
    "GameStatus",
    "PlayerManager",
    "TurnManager",
    "GameRules",
    "BaseGameRules",
    "can_start_game",
    "count_eligible_players",
    "is_game_completed",
    "is_game_in_progress",
    "BaseGame",
]
