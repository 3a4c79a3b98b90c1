"""PlayerManager - insertion-ordered, id-keyed player collection."""

from typing import Optional

from gamecore.exceptions import DuplicatePlayerError, InvalidArgumentError, PlayerNotFoundError
from gamecore.models import Player, PlayerStatus


class PlayerManager:
    """Keeps players by id, in the order they joined.

    Lookups that miss return None; use require_player() when a miss is
    an error.
    """

    def __init__(self) -> None:
        self._players: dict[str, Player] = {}

    @property
    def all_players(self) -> list[Player]:
        return list(self._players.values())

    @property
    def active_players(self) -> list[Player]:
        return [p for p in self._players.values() if p.status == PlayerStatus.ACTIVE]

    @property
    def player_count(self) -> int:
        return len(self._players)

    @property
    def active_player_count(self) -> int:
        return len(self.active_players)

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    def add_player(self, player: Player) -> None:
        """Add a player.

        Raises:
            InvalidArgumentError: If player is None.
            DuplicatePlayerError: If a player with the same id exists.
        """
        if player is None:
            raise InvalidArgumentError("Player cannot be None")
        if player.id in self._players:
            raise DuplicatePlayerError(player.id)
        self._players[player.id] = player

    def remove_player(self, player_id: str) -> Optional[Player]:
        """Remove and return a player, or None if absent."""
        return self._players.pop(player_id, None)

    def get_player(self, player_id: str) -> Optional[Player]:
        return self._players.get(player_id)

    def require_player(self, player_id: str) -> Player:
        """Get a player that must exist.

        Raises:
            PlayerNotFoundError: If no player has this id.
        """
        player = self._players.get(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player

    def has_player(self, player_id: str) -> bool:
        return player_id in self._players

    def update_player_status(self, player_id: str, status: PlayerStatus) -> None:
        player = self._players.get(player_id)
        if player is not None:
            player.status = status

    def set_all_players_status(self, status: PlayerStatus) -> None:
        for player in self._players.values():
            player.status = status
