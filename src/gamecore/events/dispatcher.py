"""GameEventDispatcher - broadcasts actions to listeners and keeps history."""

import logging
from typing import Any, Callable, Optional, Protocol, Union

from gamecore.events.event_log import EventLog
from gamecore.events.game_events import GameAction, GameActionType
from gamecore.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


class GameEventListener(Protocol):
    """Observer notified synchronously on every dispatched action."""

    def on_game_event(self, action: GameAction) -> None:
        ...


Listener = Union[GameEventListener, Callable[[GameAction], Any]]


class GameEventDispatcher:
    """Fans out actions to listeners and records them for replay.

    History records every dispatched action in order, whatever the
    listeners do. Listeners are notified in subscription order; an
    exception raised by one listener is logged and does not stop the
    others.

    Usage:
        dispatcher = GameEventDispatcher()
        dispatcher.subscribe(ui)                  # has on_game_event()
        dispatcher.subscribe(lambda a: print(a))  # plain callables work too
        dispatcher.dispatch(GameStarted(player_ids=["p1", "p2"]))
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._history: list[GameAction] = []

    @property
    def event_history(self) -> tuple[GameAction, ...]:
        return tuple(self._history)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> None:
        """Add a listener. Subscribing the same object twice is a no-op.

        Raises:
            InvalidArgumentError: If listener is None or cannot be called.
        """
        if listener is None:
            raise InvalidArgumentError("Listener cannot be None")
        if not hasattr(listener, "on_game_event") and not callable(listener):
            raise InvalidArgumentError(
                f"Listener {listener!r} has no on_game_event() and is not callable"
            )
        if self._index_of(listener) is None:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        index = self._index_of(listener)
        if index is not None:
            del self._listeners[index]

    def dispatch(self, action: GameAction) -> None:
        """Record the action, then notify every listener.

        Raises:
            InvalidArgumentError: If action is None.
        """
        if action is None:
            raise InvalidArgumentError("Action cannot be None")

        self._history.append(action)

        # Copy so listeners may (un)subscribe while being notified
        for listener in list(self._listeners):
            handler = getattr(listener, "on_game_event", listener)
            try:
                handler(action)
            except Exception:
                logger.exception(
                    "Event listener %r failed on %s",
                    listener,
                    getattr(action.action_type, "value", action.action_type),
                )

    def get_events_by_type(self, action_type: GameActionType) -> list[GameAction]:
        return [a for a in self._history if a.action_type == action_type]

    def clear_history(self) -> None:
        self._history.clear()

    def export_log(
        self, game_id: str, player_names: Optional[dict[str, str]] = None
    ) -> EventLog:
        """Snapshot the history as a serializable EventLog."""
        return EventLog.from_actions(game_id, self._history, player_names)

    def _index_of(self, listener: Listener) -> Optional[int]:
        # Identity, not equality: two equal listeners are still two observers
        for i, existing in enumerate(self._listeners):
            if existing is listener:
                return i
        return None
