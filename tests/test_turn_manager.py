"""Tests for TurnManager."""

import random

import pytest

from gamecore.engine.turn_manager import TurnManager
from gamecore.exceptions import InvalidArgumentError, InvalidGameStateError
from gamecore.models import Player, PlayerStatus, TurnStatus


def make_players(*ids: str, status: PlayerStatus = PlayerStatus.WAITING) -> list[Player]:
    """Helper to create players named after their ids."""
    return [Player(id=pid, name=pid.upper(), status=status) for pid in ids]


class TestConstruction:
    """Tests for TurnManager initialization."""

    def test_initial_state(self):
        """Test a new manager is pending at turn 0 on the first player."""
        manager = TurnManager(make_players("a", "b", "c"))
        assert manager.current_turn_number == 0
        assert manager.turn_status == TurnStatus.PENDING
        assert manager.current_player.id == "a"
        assert manager.turn_history == ()
        assert manager.current_turn is None

    @pytest.mark.parametrize("players", [None, []])
    def test_empty_players_rejected(self, players):
        """Test that None or an empty list is an invalid argument."""
        with pytest.raises(InvalidArgumentError):
            TurnManager(players)

    def test_no_eligible_players(self):
        """Test that a roster with nobody ACTIVE or WAITING is an invalid state."""
        players = make_players("a", "b", status=PlayerStatus.DISCONNECTED)
        with pytest.raises(InvalidGameStateError):
            TurnManager(players)

    def test_only_eligible_players_join_rotation(self):
        """Test that ineligible players are filtered out, order preserved."""
        players = [
            Player(id="a", name="A", status=PlayerStatus.ACTIVE),
            Player(id="b", name="B", status=PlayerStatus.ELIMINATED),
            Player(id="c", name="C", status=PlayerStatus.WAITING),
            Player(id="d", name="D", status=PlayerStatus.DISCONNECTED),
        ]
        manager = TurnManager(players)
        assert [p.id for p in manager.player_order] == ["a", "c"]

    def test_players_are_shared_not_copied(self):
        """Test that the manager works on the roster's own Player objects."""
        players = make_players("a", "b")
        manager = TurnManager(players)
        assert manager.player_order[0] is players[0]
        manager.eliminate_player("b")
        assert players[1].status == PlayerStatus.ELIMINATED


class TestStartAndEndTurn:
    """Tests for start_turn / end_turn / skip_turn."""

    def test_start_turn(self):
        """Test starting the first turn."""
        manager = TurnManager(make_players("a", "b"))
        turn = manager.start_turn()
        assert manager.turn_status == TurnStatus.ACTIVE
        assert manager.current_turn_number == 1
        assert turn.turn_number == 1
        assert turn.player_id == "a"
        assert turn.status == TurnStatus.ACTIVE
        assert manager.turn_history == (turn,)

    def test_double_start_fails(self):
        """Test that starting a turn twice in a row is an invalid state."""
        manager = TurnManager(make_players("a", "b"))
        manager.start_turn()
        with pytest.raises(InvalidGameStateError):
            manager.start_turn()
        assert manager.current_turn_number == 1
        assert len(manager.turn_history) == 1

    def test_end_turn(self):
        """Test ending the active turn."""
        manager = TurnManager(make_players("a", "b"))
        manager.start_turn()
        manager.end_turn()
        assert manager.turn_status == TurnStatus.COMPLETED
        assert manager.current_turn.status == TurnStatus.COMPLETED
        assert manager.current_turn.completed_at is not None

    def test_end_turn_without_active_turn(self):
        """Test that ending a turn that never started fails."""
        manager = TurnManager(make_players("a", "b"))
        with pytest.raises(InvalidGameStateError):
            manager.end_turn()

    def test_end_turn_twice_fails(self):
        """Test that a completed turn cannot be ended again."""
        manager = TurnManager(make_players("a", "b"))
        manager.start_turn()
        manager.end_turn()
        with pytest.raises(InvalidGameStateError):
            manager.end_turn()

    def test_skip_turn(self):
        """Test skipping the active turn."""
        manager = TurnManager(make_players("a", "b"))
        manager.start_turn()
        manager.skip_turn()
        assert manager.turn_status == TurnStatus.SKIPPED
        assert manager.current_turn.status == TurnStatus.SKIPPED

    def test_skip_turn_without_active_turn(self):
        """Test that only an active turn can be skipped."""
        manager = TurnManager(make_players("a", "b"))
        with pytest.raises(InvalidGameStateError):
            manager.skip_turn()

    def test_start_after_end_on_same_player(self):
        """Test that a new turn may start for the same player after end_turn."""
        manager = TurnManager(make_players("a", "b"))
        manager.start_turn()
        manager.end_turn()
        turn = manager.start_turn()
        assert turn.turn_number == 2
        assert turn.player_id == "a"

    def test_turn_numbers_increase_by_one(self):
        """Test that every new Turn gets the next number."""
        manager = TurnManager(make_players("a", "b", "c"))
        for _ in range(7):
            manager.start_turn()
            manager.next_turn()
        numbers = [t.turn_number for t in manager.turn_history]
        assert numbers == list(range(1, 8))

    def test_at_most_one_active_turn(self):
        """Test that history never holds two active turns."""
        manager = TurnManager(make_players("a", "b", "c"))
        for _ in range(5):
            manager.start_turn()
            active = [t for t in manager.turn_history if t.status == TurnStatus.ACTIVE]
            assert len(active) == 1
            manager.next_turn()
        active = [t for t in manager.turn_history if t.status == TurnStatus.ACTIVE]
        assert active == []


class TestNextTurn:
    """Tests for rotation and elimination."""

    def test_next_turn_moves_to_next_player(self):
        """Test that next_turn advances the cursor and goes back to pending."""
        manager = TurnManager(make_players("a", "b", "c"))
        manager.start_turn()
        player = manager.next_turn()
        assert player.id == "b"
        assert manager.current_player.id == "b"
        assert manager.turn_status == TurnStatus.PENDING

    def test_next_turn_completes_active_turn(self):
        """Test that an active turn is completed, never left dangling."""
        manager = TurnManager(make_players("a", "b"))
        manager.start_turn()
        manager.next_turn()
        assert manager.turn_history[0].status == TurnStatus.COMPLETED

    def test_next_turn_keeps_skipped_turn(self):
        """Test that a skipped turn is not turned into a completed one."""
        manager = TurnManager(make_players("a", "b"))
        manager.start_turn()
        manager.skip_turn()
        manager.next_turn()
        assert manager.turn_history[0].status == TurnStatus.SKIPPED

    @pytest.mark.parametrize("count", [1, 2, 3, 5])
    def test_rotation_is_circular(self, count):
        """Test that N calls return to the starting player."""
        ids = [f"p{i}" for i in range(count)]
        manager = TurnManager(make_players(*ids))
        seen = []
        for _ in range(count):
            seen.append(manager.next_turn().id)
        assert manager.current_player.id == "p0"
        assert seen == ids[1:] + ids[:1]

    def test_eliminated_player_is_never_selected(self):
        """Test that next_turn skips an eliminated player forever."""
        manager = TurnManager(make_players("a", "b", "c", "d"))
        manager.eliminate_player("c")
        for _ in range(12):
            manager.start_turn()
            assert manager.next_turn().id != "c"

    def test_all_but_current_eliminated(self):
        """Test that the only remaining player gets every turn."""
        manager = TurnManager(make_players("a", "b", "c"))
        manager.eliminate_player("b")
        manager.eliminate_player("c")
        for _ in range(3):
            assert manager.next_turn().id == "a"

    def test_all_eliminated_fails_without_side_effects(self):
        """Test that next_turn fails when everyone is eliminated and changes nothing."""
        manager = TurnManager(make_players("a", "b", "c"))
        manager.start_turn()
        for pid in ("a", "b", "c"):
            manager.eliminate_player(pid)

        with pytest.raises(InvalidGameStateError, match="No active players remaining"):
            manager.next_turn()

        assert manager.current_player.id == "a"
        assert manager.turn_status == TurnStatus.ACTIVE
        assert manager.active_player_count == 0

    def test_elimination_scenario(self):
        """Test that elimination only takes effect on the next rotation.

        Players [A, B, C]: A plays turn 1, cursor moves to B, B is
        eliminated, B still gets turn 2, then C is next.
        """
        manager = TurnManager(make_players("a", "b", "c"))

        manager.start_turn()
        assert manager.current_player.id == "a"
        assert manager.current_turn_number == 1

        manager.next_turn()
        assert manager.current_player.id == "b"
        assert manager.turn_status == TurnStatus.PENDING

        manager.eliminate_player("b")
        turn = manager.start_turn()
        assert turn.turn_number == 2
        assert turn.player_id == "b"
        assert manager.is_player_turn("b")

        assert manager.next_turn().id == "c"

    def test_elimination_never_shrinks_order(self):
        """Test that eliminated players stay in the rotation order."""
        manager = TurnManager(make_players("a", "b", "c"))
        manager.eliminate_player("b")
        assert [p.id for p in manager.player_order] == ["a", "b", "c"]
        assert manager.active_player_count == 2


class TestIsPlayerTurn:
    """Tests for is_player_turn."""

    def test_true_only_for_active_current_player(self):
        """Test the only combination that returns True."""
        manager = TurnManager(make_players("a", "b"))
        manager.start_turn()
        assert manager.is_player_turn("a")
        assert not manager.is_player_turn("b")

    def test_false_while_pending(self):
        """Test that the right player during PENDING is not on turn."""
        manager = TurnManager(make_players("a", "b"))
        assert not manager.is_player_turn("a")
        manager.start_turn()
        manager.next_turn()
        assert not manager.is_player_turn("b")

    def test_false_after_end_turn(self):
        """Test that the right player during COMPLETED is not on turn."""
        manager = TurnManager(make_players("a", "b"))
        manager.start_turn()
        manager.end_turn()
        assert not manager.is_player_turn("a")

    def test_false_for_unknown_player(self):
        """Test an id that is not in the rotation."""
        manager = TurnManager(make_players("a", "b"))
        manager.start_turn()
        assert not manager.is_player_turn("zed")


class TestEliminateAndShuffle:
    """Tests for eliminate_player and shuffle_order."""

    def test_eliminate_unknown_player_is_noop(self):
        """Test that eliminating an absent id does nothing."""
        manager = TurnManager(make_players("a", "b"))
        manager.eliminate_player("zed")
        assert manager.active_player_count == 2

    def test_eliminate_does_not_move_cursor(self):
        """Test that eliminating the current player leaves the turn alone."""
        manager = TurnManager(make_players("a", "b"))
        manager.start_turn()
        manager.eliminate_player("a")
        assert manager.current_player.id == "a"
        assert manager.turn_status == TurnStatus.ACTIVE

    def test_shuffle_preserves_players(self):
        """Test that shuffling keeps the same set of players."""
        players = make_players("a", "b", "c", "d", "e")
        manager = TurnManager(players, rng=random.Random(3))
        manager.shuffle_order()
        assert sorted(p.id for p in manager.player_order) == ["a", "b", "c", "d", "e"]

    def test_shuffle_resets_cursor_only(self):
        """Test that shuffling resets the cursor but keeps counter and history."""
        manager = TurnManager(make_players("a", "b", "c", "d"), rng=random.Random(11))
        manager.start_turn()
        manager.next_turn()
        manager.start_turn()
        manager.next_turn()

        manager.shuffle_order()

        assert manager.current_player is manager.player_order[0]
        assert manager.current_turn_number == 2
        assert len(manager.turn_history) == 2

    def test_shuffle_is_reproducible_with_seed(self):
        """Test that the same seed gives the same order."""
        orders = []
        for _ in range(2):
            manager = TurnManager(make_players("a", "b", "c", "d", "e"), rng=random.Random(42))
            manager.shuffle_order()
            orders.append([p.id for p in manager.player_order])
        assert orders[0] == orders[1]
