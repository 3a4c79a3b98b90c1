"""Persistent, replayable log of dispatched actions."""

from datetime import datetime, timezone
from typing import Iterable

import yaml
from pydantic import BaseModel, Field

from gamecore.events.event_formatter import EventFormatter
from gamecore.events.game_events import ActionRecord, GameAction, GameActionType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EventLog(BaseModel):
    """Ordered records of everything dispatched during one game.

    Structure:
    - game_id: Game the records belong to
    - player_names: id -> display name, for formatting
    - records: ActionRecords in dispatch order
    """

    game_id: str
    created_at: datetime = Field(default_factory=_utcnow)
    player_names: dict[str, str] = Field(default_factory=dict)
    records: list[ActionRecord] = Field(default_factory=list)

    @classmethod
    def from_actions(
        cls,
        game_id: str,
        actions: Iterable[GameAction],
        player_names: dict[str, str] | None = None,
    ) -> "EventLog":
        return cls(
            game_id=game_id,
            player_names=dict(player_names or {}),
            records=[ActionRecord.from_action(a) for a in actions],
        )

    def __len__(self) -> int:
        return len(self.records)

    def __str__(self) -> str:
        formatter = EventFormatter(self.player_names)
        lines = [f"Game {self.game_id} ({len(self.records)} events)"]
        for record in self.records:
            lines.append(f"  {formatter.format(record)}")
        return "\n".join(lines)

    def get_by_type(self, action_type: GameActionType) -> list[ActionRecord]:
        return [r for r in self.records if r.action_type == action_type]

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_yaml(self) -> str:
        """Serialize the event log to a YAML string."""
        data = self.model_dump(mode="json")
        return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    @classmethod
    def from_yaml(cls, text: str) -> "EventLog":
        return cls.model_validate(yaml.safe_load(text))

    def save_to_file(self, filepath: str) -> None:
        """Serialize the event log to a YAML file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.to_yaml())

    @classmethod
    def load_from_file(cls, filepath: str) -> "EventLog":
        """Load an event log from a YAML file."""
        with open(filepath, "r", encoding="utf-8") as f:
            return cls.from_yaml(f.read())
