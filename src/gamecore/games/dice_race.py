"""Dice Race - a small game built on the core, used by the demo CLI.

Players roll a die in turn and add the value to their score. Rolling the
bust face knocks the player out of the race. The first to reach the
target score wins; if only one player is left standing, or the round
limit runs out, the best remaining score wins.
"""

import logging
import random
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field, PositiveInt

from gamecore.engine import BaseGame, BaseGameRules, GameState, PlayerManager
from gamecore.events import GameAction, GameEventDispatcher, PlayerAction
from gamecore.models import Player, PlayerStatus, Turn

logger = logging.getLogger(__name__)

DEFAULT_TARGET_SCORE = 20
MAX_GAME_ROUNDS = 30


class DiceRaceConfig(BaseModel):
    """Settings for one race."""

    target_score: PositiveInt = DEFAULT_TARGET_SCORE
    die_sides: int = Field(default=6, ge=2)
    bust_face: PositiveInt = 1
    max_rounds: Optional[PositiveInt] = MAX_GAME_ROUNDS
    min_players: PositiveInt = 2
    max_players: PositiveInt = 6
    shuffle_order: bool = False


class DiceRaceData(BaseModel):
    """Game-owned part of the state (GameState.data)."""

    target_score: int
    bust_face: int
    scores: dict[str, int] = Field(default_factory=dict)
    busted: list[str] = Field(default_factory=list)
    last_roll: Optional[int] = None
    rounds_exhausted: bool = False

    def standing(self) -> list[str]:
        """Ids still in the race, in score order (best first)."""
        alive = [pid for pid in self.scores if pid not in self.busted]
        return sorted(alive, key=lambda pid: self.scores[pid], reverse=True)


class RollAction(PlayerAction):
    """A player rolled the die."""

    value: int

    def validate(self, state: Any) -> bool:
        data = state.data
        return (
            data is not None
            and self.player_id in data.scores
            and self.player_id not in data.busted
        )

    def execute(self, state: Any) -> None:
        data = state.data
        data.last_roll = self.value
        if self.value == data.bust_face:
            data.busted.append(self.player_id)
        else:
            data.scores[self.player_id] += self.value

    def __str__(self) -> str:
        return f"Roll(player={self.player_id}, value={self.value})"


class DiceRaceRules(BaseGameRules):
    """Rules of the race. The winner is looked up in the bound roster."""

    def __init__(self, config: DiceRaceConfig):
        super().__init__(config.min_players, config.max_players)
        self.config = config
        self.roster: Optional[PlayerManager] = None

    def validate_action(self, action: GameAction, state: GameState) -> bool:
        return isinstance(action, RollAction) and 1 <= action.value <= self.config.die_sides

    def is_game_over(self, state: GameState) -> bool:
        data: Optional[DiceRaceData] = state.data
        if data is None:
            return False
        if any(score >= data.target_score for score in data.scores.values()):
            return True
        return len(data.standing()) <= 1 or data.rounds_exhausted

    def get_winner(self, state: GameState) -> Optional[Player]:
        data: Optional[DiceRaceData] = state.data
        if data is None or self.roster is None:
            return None
        standing = data.standing()
        if not standing:
            return None
        return self.roster.get_player(standing[0])


class DiceRaceGame(BaseGame):
    """Turn-based dice race.

    Usage:
        game = DiceRaceGame("race-1", DiceRaceConfig(target_score=15), seed=7)
        game.add_player(Player(id="p1", name="Alice"))
        game.add_player(Player(id="p2", name="Bob"))
        game.start_game()
        while game.state.status == GameStatus.IN_PROGRESS:
            game.roll()
    """

    def __init__(
        self,
        game_id: str,
        config: Optional[DiceRaceConfig] = None,
        seed: Optional[int] = None,
        dispatcher: Optional[GameEventDispatcher] = None,
    ):
        self.config = config if config is not None else DiceRaceConfig()
        rules = DiceRaceRules(self.config)
        state: GameState[DiceRaceData] = GameState[DiceRaceData](
            game_id=game_id, max_rounds=self.config.max_rounds
        )
        super().__init__(game_id, rules, state=state, dispatcher=dispatcher)
        rules.roster = self._players
        self._rng = random.Random(seed)
        self._last_turn_index = -1

    @property
    def data(self) -> DiceRaceData:
        return self.state.data

    def roll(self) -> RollAction:
        """Roll for the player whose turn it is."""
        player = self._require_turn_manager().current_player
        action = RollAction(player_id=player.id, value=self._rng.randint(1, self.config.die_sides))
        self.perform_action(action)
        return action

    def on_game_started(self) -> None:
        self._players.set_all_players_status(PlayerStatus.ACTIVE)
        self.state.data = DiceRaceData(
            target_score=self.config.target_score,
            bust_face=self.config.bust_face,
            scores={p.id: 0 for p in self.players},
        )
        self.start_turn_rotation(shuffle=self.config.shuffle_order, rng=self._rng)

    def on_turn_started(self, turn: Turn) -> None:
        index = self._order_ids().index(turn.player_id)
        if index <= self._last_turn_index or self.state.current_round == 0:
            self.state.current_round += 1
        self._last_turn_index = index

    def on_action_executed(self, action: GameAction) -> None:
        data = self.data
        player = self._players.require_player(action.player_id)
        player.score = data.scores[player.id]

        if action.player_id in data.busted:
            logger.info("%s rolled %d and is out", player.name, data.bust_face)
            self._require_turn_manager().eliminate_player(player.id)

        if self._closes_round(action.player_id):
            max_rounds = self.state.max_rounds
            if max_rounds is not None and self.state.current_round >= max_rounds:
                data.rounds_exhausted = True

    def on_game_ended(self) -> None:
        winner = self.winner
        if winner is not None:
            winner.status = PlayerStatus.WINNER

    def _order_ids(self) -> list[str]:
        return [p.id for p in self._require_turn_manager().player_order]

    def _closes_round(self, player_id: str) -> bool:
        """True if no one after this player is still in the race this round."""
        order = self._require_turn_manager().player_order
        ids = [p.id for p in order]
        later = order[ids.index(player_id) + 1:]
        return all(p.status == PlayerStatus.ELIMINATED for p in later)


def create_players(names: Sequence[str]) -> list[Player]:
    """Build players with ids p1, p2, ... in the given order."""
    return [Player(id=f"p{i}", name=name) for i, name in enumerate(names, start=1)]


__all__ = [
    "DEFAULT_TARGET_SCORE",
    "MAX_GAME_ROUNDS",
    "DiceRaceConfig",
    "DiceRaceData",
    "DiceRaceGame",
    "DiceRaceRules",
    "RollAction",
    "create_players",
]
