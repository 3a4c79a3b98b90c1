"""Game exceptions.

All errors raised by the core derive from GameError so callers can catch
the whole family, or a single kind when they need to tell them apart.
"""

from datetime import datetime, timezone
from typing import Optional


class GameError(Exception):
    """Base class for all game errors."""

    def __init__(self, message: str, game_id: Optional[str] = None):
        self.game_id = game_id
        self.occurred_at = datetime.now(timezone.utc)
        super().__init__(message)


class InvalidArgumentError(GameError, ValueError):
    """Raised for missing or malformed input (empty id, None player...)."""


class InvalidGameStateError(GameError):
    """Raised when an operation is not legal in the current game or turn state.

    Example: ending a turn that was never started.
    """


class InvalidPlayerActionError(GameError):
    """Raised when a player acts out of turn."""

    def __init__(self, message: str, player_id: str, game_id: Optional[str] = None):
        self.player_id = player_id
        super().__init__(message, game_id)


class GameRuleViolationError(GameError):
    """Raised when an action breaks a game rule."""

    def __init__(self, message: str, rule_name: str, game_id: Optional[str] = None):
        self.rule_name = rule_name
        super().__init__(message, game_id)


class PlayerNotFoundError(GameError):
    """Raised when a required player lookup misses."""

    def __init__(self, player_id: str, game_id: Optional[str] = None):
        self.player_id = player_id
        super().__init__(f"Player {player_id} not found", game_id)


class DuplicatePlayerError(GameError):
    """Raised when a player id is already in the roster."""

    def __init__(self, player_id: str, game_id: Optional[str] = None):
        self.player_id = player_id
        super().__init__(f"Player {player_id} already exists", game_id)


class GameCapacityExceededError(GameError):
    """Raised when adding a player would exceed the maximum roster size."""

    def __init__(self, max_capacity: int, current_count: int, game_id: Optional[str] = None):
        self.max_capacity = max_capacity
        self.current_count = current_count
        super().__init__(
            f"Game capacity exceeded. Max: {max_capacity}, Current: {current_count}",
            game_id,
        )
