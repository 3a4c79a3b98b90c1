"""Human-readable formatting for actions and action records."""

from typing import Optional, Union

from gamecore.events.game_events import (
    SYSTEM_PLAYER_ID,
    ActionRecord,
    GameAction,
    GameActionType,
)


class EventFormatter:
    """Formats actions using player names instead of raw ids.

    Works on live actions and on ActionRecords loaded from a saved log,
    so the same text comes out during play and on replay.
    """

    def __init__(self, player_names: Optional[dict[str, str]] = None):
        self.player_names = player_names or {}

    def name(self, player_id: Optional[str]) -> str:
        if player_id is None:
            return "nobody"
        return self.player_names.get(player_id, player_id)

    def format(self, action: Union[GameAction, ActionRecord]) -> str:
        record = action if isinstance(action, ActionRecord) else ActionRecord.from_action(action)
        payload = record.payload
        who = self.name(record.player_id)

        kind = record.action_type
        if kind == GameActionType.GAME_STARTED:
            names = ", ".join(self.name(pid) for pid in payload.get("player_ids", []))
            return f"Game started with {names}" if names else "Game started"
        if kind == GameActionType.GAME_ENDED:
            winner = payload.get("winner_id")
            return f"Game over, winner: {self.name(winner)}"
        if kind == GameActionType.TURN_STARTED:
            return f"Turn {payload.get('turn_number', '?')}: {who}"
        if kind == GameActionType.TURN_ENDED:
            status = str(payload.get("status", "COMPLETED")).lower()
            return f"Turn {payload.get('turn_number', '?')} {status} ({who})"
        if kind == GameActionType.PLAYER_JOINED:
            return f"{payload.get('player_name', who)} joined"
        if kind == GameActionType.PLAYER_LEFT:
            return f"{who} left"
        if kind == GameActionType.CUSTOM_EVENT:
            return f"[{payload.get('name', 'event')}] {self._describe_payload(payload.get('payload', {}))}"

        # PLAYER_ACTION
        details = self._describe_payload(payload)
        actor = "" if record.player_id == SYSTEM_PLAYER_ID else f"{who}: "
        return f"{actor}{record.action_class}" + (f" ({details})" if details else "")

    @staticmethod
    def _describe_payload(payload: dict) -> str:
        return ", ".join(f"{k}={v}" for k, v in payload.items())
