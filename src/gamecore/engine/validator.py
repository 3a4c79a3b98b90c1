"""Shared checks on game state, independent of any game's rules."""

from typing import Optional, Sequence

from gamecore.engine.game_state import GameState, GameStatus
from gamecore.models import Player


def count_eligible_players(players: Sequence[Player]) -> int:
    """Count players that could take part in a rotation (ACTIVE or WAITING)."""
    return sum(1 for p in players if p.is_eligible)


def can_start_game(
    state: Optional[GameState],
    players: Optional[Sequence[Player]],
    min_players: int,
    max_players: int,
) -> bool:
    """True if the game is still waiting and has an acceptable roster size."""
    if state is None or players is None:
        return False

    if state.status != GameStatus.WAITING:
        return False

    eligible = count_eligible_players(players)
    return min_players <= eligible <= max_players


def is_game_in_progress(state: Optional[GameState]) -> bool:
    return state is not None and state.status == GameStatus.IN_PROGRESS


def is_game_completed(state: Optional[GameState]) -> bool:
    """True once the game has finished, normally or by cancellation."""
    return state is not None and state.status in (GameStatus.COMPLETED, GameStatus.CANCELLED)
