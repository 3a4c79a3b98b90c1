"""BaseGame - lifecycle orchestration shared by every game."""

import logging
import random
from typing import Optional

from gamecore.engine.game_state import GameState, GameStatus
from gamecore.engine.player_manager import PlayerManager
from gamecore.engine.rules import GameRules
from gamecore.engine.turn_manager import TurnManager
from gamecore.events import (
    GameAction,
    GameEnded,
    GameEventDispatcher,
    GameStarted,
    PlayerJoined,
    PlayerLeft,
    TurnEnded,
    TurnStarted,
)
from gamecore.exceptions import (
    GameCapacityExceededError,
    GameRuleViolationError,
    InvalidArgumentError,
    InvalidGameStateError,
    InvalidPlayerActionError,
)
from gamecore.models import Player, PlayerStatus, Turn

logger = logging.getLogger(__name__)


class BaseGame:
    """Owns the roster, the state and the turn manager of one game.

    Game Flow:
        1. add_player() until the roster is complete
        2. start_game(): rules check -> IN_PROGRESS -> on_game_started()
        3. perform_action() for each move; turns advance automatically
        4. end_game(): COMPLETED -> on_game_ended()

    Games plug their rules in through a GameRules object and keep their
    own data in state.data. Subclasses override on_game_started() (usually
    to call start_turn_rotation()) and on_game_ended().

    Every transition is mirrored to the dispatcher, so listeners and the
    event history see the whole game.
    """

    def __init__(
        self,
        game_id: str,
        rules: GameRules,
        state: Optional[GameState] = None,
        dispatcher: Optional[GameEventDispatcher] = None,
    ):
        """Initialize the game.

        Args:
            game_id: Unique, non-blank game id.
            rules: Rules collaborator for this game.
            state: Existing state to use; a fresh WAITING state by default.
            dispatcher: Dispatcher shared with the application; a private
                        one by default.

        Raises:
            InvalidArgumentError: If game_id is blank, rules is None, or
                                  state belongs to another game.
        """
        if not game_id or not game_id.strip():
            raise InvalidArgumentError("Game ID cannot be empty")
        if rules is None:
            raise InvalidArgumentError("Rules cannot be None", game_id)
        if state is not None and state.game_id != game_id:
            raise InvalidArgumentError(
                f"State belongs to game {state.game_id}, not {game_id}", game_id
            )

        self.game_id = game_id
        self.rules = rules
        self.state: GameState = state if state is not None else GameState(game_id=game_id)
        self.dispatcher = dispatcher if dispatcher is not None else GameEventDispatcher()
        self.turn_manager: Optional[TurnManager] = None
        self._players = PlayerManager()

    # =========================================================================
    # Roster
    # =========================================================================

    @property
    def players(self) -> list[Player]:
        """Roster in join order."""
        return self._players.all_players

    @property
    def player_names(self) -> dict[str, str]:
        return {p.id: p.name for p in self._players.all_players}

    def get_player(self, player_id: str) -> Optional[Player]:
        return self._players.get_player(player_id)

    def add_player(self, player: Player) -> None:
        """Add a player at the end of the roster.

        Raises:
            InvalidArgumentError: If player is None.
            GameCapacityExceededError: If the roster is already full.
            DuplicatePlayerError: If the id is already taken.
        """
        if player is None:
            raise InvalidArgumentError("Player cannot be None", self.game_id)

        if len(self._players) >= self.rules.max_players:
            raise GameCapacityExceededError(
                self.rules.max_players, len(self._players), self.game_id
            )

        self._players.add_player(player)
        logger.debug("Player %s joined game %s", player.id, self.game_id)
        self.dispatcher.dispatch(PlayerJoined(player_id=player.id, player_name=player.name))

    def remove_player(self, player_id: str) -> None:
        """Disconnect and remove a player; unknown ids are ignored."""
        player = self._players.remove_player(player_id)
        if player is None:
            return

        player.status = PlayerStatus.DISCONNECTED
        logger.debug("Player %s left game %s", player_id, self.game_id)
        self.dispatcher.dispatch(PlayerLeft(player_id=player_id))

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start_game(self) -> None:
        """Start the game if the rules allow it.

        Order matters: the rules are checked first, then the status
        changes, then on_game_started() runs and sees IN_PROGRESS.

        Raises:
            InvalidGameStateError: If the rules refuse to start.
        """
        if not self.rules.can_start_game(self.players):
            raise InvalidGameStateError(
                "Cannot start game: insufficient players or other rule violation",
                self.game_id,
            )

        self.state.status = GameStatus.IN_PROGRESS
        self.state.mark_updated()
        logger.info("Game %s started with %d players", self.game_id, len(self._players))

        self.on_game_started()
        self.dispatcher.dispatch(GameStarted(player_ids=[p.id for p in self.players]))

    def end_game(self) -> None:
        """Mark the game COMPLETED. No checks: the caller decides when."""
        self.state.status = GameStatus.COMPLETED
        self.state.mark_updated()

        winner = self.winner
        logger.info(
            "Game %s ended, winner: %s", self.game_id, winner.id if winner else None
        )

        self.on_game_ended()
        self.dispatcher.dispatch(GameEnded(winner_id=winner.id if winner else None))

    @property
    def winner(self) -> Optional[Player]:
        return self.rules.get_winner(self.state)

    def get_state_json(self) -> str:
        return self.state.to_json()

    # =========================================================================
    # Turns and actions
    # =========================================================================

    def start_turn_rotation(
        self, shuffle: bool = False, rng: Optional[random.Random] = None
    ) -> TurnManager:
        """Create a TurnManager over the current roster and start turn 1.

        Meant to be called from on_game_started().
        """
        self.turn_manager = TurnManager(self.players, rng=rng)
        if shuffle:
            self.turn_manager.shuffle_order()
        self._start_turn()
        return self.turn_manager

    def advance_turn(self) -> Player:
        """End the current turn and start the next player's.

        Returns:
            The player whose turn is now active.

        Raises:
            InvalidGameStateError: If there is no turn manager, or every
                                   player is eliminated.
        """
        manager = self._require_turn_manager()

        previous = manager.current_turn
        manager.next_turn()
        if previous is not None and previous.is_finished:
            self.dispatcher.dispatch(
                TurnEnded(
                    player_id=previous.player_id,
                    turn_number=previous.turn_number,
                    status=previous.status,
                )
            )

        self._start_turn()
        return manager.current_player

    def perform_action(self, action: GameAction) -> None:
        """Validate, execute and broadcast a player's action, then move on.

        After the action the game ends if the rules say it is over,
        otherwise the next turn starts.

        Raises:
            InvalidArgumentError: If action is None.
            InvalidGameStateError: If the game is not in progress.
            PlayerNotFoundError: If the actor is not in the roster.
            InvalidPlayerActionError: If it is not the actor's turn.
            GameRuleViolationError: If the rules or the action reject it.
        """
        if action is None:
            raise InvalidArgumentError("Action cannot be None", self.game_id)
        if self.state.status != GameStatus.IN_PROGRESS:
            raise InvalidGameStateError(
                f"Game is {self.state.status.value}, not IN_PROGRESS", self.game_id
            )

        manager = self._require_turn_manager()
        self._players.require_player(action.player_id)

        if not manager.is_player_turn(action.player_id):
            raise InvalidPlayerActionError(
                f"It is not {action.player_id}'s turn", action.player_id, self.game_id
            )
        if not self.rules.validate_action(action, self.state):
            raise GameRuleViolationError(
                f"Action {action.action_id} rejected by game rules",
                type(self.rules).__name__,
                self.game_id,
            )
        if not action.validate(self.state):
            raise GameRuleViolationError(
                f"Action {action.action_id} is not valid in the current state",
                type(action).__name__,
                self.game_id,
            )

        action.execute(self.state)
        manager.current_turn.action_data = action.action_id
        self.state.mark_updated()
        self.dispatcher.dispatch(action)
        self.on_action_executed(action)

        if self.rules.is_game_over(self.state):
            self.end_game()
        else:
            self.advance_turn()

    # =========================================================================
    # Hooks
    # =========================================================================

    def on_game_started(self) -> None:
        """Called once the game is IN_PROGRESS."""

    def on_game_ended(self) -> None:
        """Called once the game is COMPLETED."""

    def on_turn_started(self, turn: Turn) -> None:
        """Called after each turn starts, before it is broadcast."""

    def on_action_executed(self, action: GameAction) -> None:
        """Called after an action ran, before the game-over check."""

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_turn_manager(self) -> TurnManager:
        if self.turn_manager is None:
            raise InvalidGameStateError("Turn rotation has not started", self.game_id)
        return self.turn_manager

    def _start_turn(self) -> None:
        turn = self._require_turn_manager().start_turn()
        self.on_turn_started(turn)
        self.dispatcher.dispatch(
            TurnStarted(player_id=turn.player_id, turn_number=turn.turn_number)
        )
