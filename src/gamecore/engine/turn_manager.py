"""TurnManager - circular turn rotation with elimination."""

import logging
import random
from typing import Optional, Sequence

from gamecore.exceptions import InvalidArgumentError, InvalidGameStateError
from gamecore.models import Player, PlayerStatus, Turn, TurnStatus

logger = logging.getLogger(__name__)


class TurnManager:
    """Decides whose turn it is and keeps the history of turns.

    The rotation order is fixed at construction (players that are ACTIVE
    or WAITING at that moment) and only changes through shuffle_order().
    Eliminated players stay in the order; next_turn() skips them.

    Turn flow:
        manager.start_turn()   # PENDING -> ACTIVE, new Turn recorded
        manager.end_turn()     # ACTIVE -> COMPLETED (optional)
        manager.next_turn()    # -> PENDING on the next non-eliminated player

    Players are shared with the roster, not copied, so an elimination
    made here is visible to the game and vice versa.
    """

    def __init__(self, players: Sequence[Player], rng: Optional[random.Random] = None):
        """Initialize the TurnManager.

        Args:
            players: Roster in rotation order.
            rng: Random source for shuffle_order(). Pass a seeded
                 random.Random for reproducible orders.

        Raises:
            InvalidArgumentError: If players is None or empty.
            InvalidGameStateError: If no player is ACTIVE or WAITING.
        """
        if not players:
            raise InvalidArgumentError("Player list cannot be empty")

        self._player_order: list[Player] = [p for p in players if p.is_eligible]
        if not self._player_order:
            raise InvalidGameStateError("No active players found")

        self._rng = rng if rng is not None else random.Random()
        self._current_index = 0
        self._turn_number = 0
        self._status = TurnStatus.PENDING
        self._history: list[Turn] = []

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def current_player(self) -> Player:
        return self._player_order[self._current_index]

    @property
    def current_turn_number(self) -> int:
        return self._turn_number

    @property
    def turn_status(self) -> TurnStatus:
        return self._status

    @property
    def turn_history(self) -> tuple[Turn, ...]:
        return tuple(self._history)

    @property
    def current_turn(self) -> Optional[Turn]:
        """Latest Turn record, or None before the first start_turn()."""
        return self._history[-1] if self._history else None

    @property
    def player_order(self) -> tuple[Player, ...]:
        return tuple(self._player_order)

    @property
    def active_player_count(self) -> int:
        """Players in the rotation that are not eliminated."""
        return sum(1 for p in self._player_order if p.status != PlayerStatus.ELIMINATED)

    # =========================================================================
    # Transitions
    # =========================================================================

    def start_turn(self) -> Turn:
        """Start a turn for the player at the cursor.

        The eliminated flag is not checked here: a player eliminated while
        the cursor already points at them still gets this turn.

        Raises:
            InvalidGameStateError: If a turn is already active.
        """
        if self._status == TurnStatus.ACTIVE:
            raise InvalidGameStateError("Turn already started")

        self._turn_number += 1
        self._status = TurnStatus.ACTIVE

        turn = Turn(turn_number=self._turn_number, player_id=self.current_player.id)
        turn.activate()
        self._history.append(turn)
        logger.debug("Turn %d started for %s", turn.turn_number, turn.player_id)
        return turn

    def end_turn(self) -> None:
        """Complete the active turn.

        Raises:
            InvalidGameStateError: If no turn is active.
        """
        if self._status != TurnStatus.ACTIVE:
            raise InvalidGameStateError("No active turn to end")

        self._history[-1].complete()
        self._status = TurnStatus.COMPLETED

    def skip_turn(self) -> None:
        """Abandon the active turn (timeout, forfeit...).

        Raises:
            InvalidGameStateError: If no turn is active.
        """
        if self._status != TurnStatus.ACTIVE:
            raise InvalidGameStateError("No active turn to skip")

        self._history[-1].skip()
        self._status = TurnStatus.SKIPPED
        logger.debug("Turn %d skipped", self._turn_number)

    def next_turn(self) -> Player:
        """Move the cursor to the next player that is not eliminated.

        An active turn is completed first. Rotation follows the fixed
        order and wraps around.

        Returns:
            The new current player.

        Raises:
            InvalidGameStateError: If every player is eliminated. Nothing
                is changed in that case.
        """
        if self.active_player_count == 0:
            raise InvalidGameStateError("No active players remaining")

        if self._status == TurnStatus.ACTIVE:
            self.end_turn()

        count = len(self._player_order)
        index = (self._current_index + 1) % count
        while self._player_order[index].status == PlayerStatus.ELIMINATED:
            index = (index + 1) % count

        self._current_index = index
        self._status = TurnStatus.PENDING
        return self.current_player

    def is_player_turn(self, player_id: str) -> bool:
        """True only while this player's turn is ACTIVE."""
        return self.current_player.id == player_id and self._status == TurnStatus.ACTIVE

    def eliminate_player(self, player_id: str) -> None:
        """Mark a player ELIMINATED; unknown ids are ignored.

        The cursor does not move. If the eliminated player is mid-turn,
        the turn continues and the skip happens on the next next_turn().
        """
        for player in self._player_order:
            if player.id == player_id:
                player.status = PlayerStatus.ELIMINATED
                logger.info("Player %s eliminated", player_id)
                return

    def shuffle_order(self) -> None:
        """Randomize the rotation order and put the cursor back at the start.

        The turn counter and history are kept.
        """
        self._rng.shuffle(self._player_order)
        self._current_index = 0
