"""Rules contract consumed by BaseGame."""

from typing import Optional, Protocol, Sequence

from gamecore.engine.game_state import GameState
from gamecore.engine.validator import count_eligible_players
from gamecore.events.game_events import GameAction
from gamecore.exceptions import InvalidArgumentError
from gamecore.models import Player


class GameRules(Protocol):
    """Strategy object holding one game's rules.

    The core calls these but never implements game logic itself.
    """

    @property
    def min_players(self) -> int:
        ...

    @property
    def max_players(self) -> int:
        ...

    def can_start_game(self, players: Sequence[Player]) -> bool:
        ...

    def validate_action(self, action: GameAction, state: GameState) -> bool:
        ...

    def is_game_over(self, state: GameState) -> bool:
        ...

    def get_winner(self, state: GameState) -> Optional[Player]:
        ...


class BaseGameRules:
    """Rules with roster-size checks and permissive defaults.

    Games subclass this and override the hooks they care about.
    """

    def __init__(self, min_players: int, max_players: int):
        if min_players < 1:
            raise InvalidArgumentError(f"min_players must be >= 1, got {min_players}")
        if max_players < min_players:
            raise InvalidArgumentError(
                f"max_players ({max_players}) must be >= min_players ({min_players})"
            )
        self._min_players = min_players
        self._max_players = max_players

    @property
    def min_players(self) -> int:
        return self._min_players

    @property
    def max_players(self) -> int:
        return self._max_players

    def can_start_game(self, players: Sequence[Player]) -> bool:
        """True if the number of ACTIVE/WAITING players is within bounds."""
        return self._min_players <= count_eligible_players(players) <= self._max_players

    def validate_action(self, action: GameAction, state: GameState) -> bool:
        return True

    def is_game_over(self, state: GameState) -> bool:
        return False

    def get_winner(self, state: GameState) -> Optional[Player]:
        return None
