"""Row-level change notifications, filtered by room.

Every store publishes one ``ChangeEvent`` per inserted, updated or deleted
row. Subscribers pick a table, optionally a room and a subset of event
types, and are called synchronously in subscription order.
"""

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

INSERT = 'INSERT'
UPDATE = 'UPDATE'
DELETE = 'DELETE'
ALL_EVENTS = (INSERT, UPDATE, DELETE)

USERS = 'users'
ROOMS = 'rooms'
ROOM_PLAYERS = 'room_players'
GUESSES = 'guesses'
DRAWING_STROKES = 'drawing_strokes'


@dataclass
class ChangeEvent:
    table: str
    event_type: str
    room_id: Optional[int]
    new: Optional[Dict[str, Any]] = None
    old: Optional[Dict[str, Any]] = None


class Subscription:
    def __init__(self, feed: 'ChangeFeed', key: int):
        self._feed = feed
        self._key = key

    @property
    def active(self) -> bool:
        return self._key in self._feed._subscribers

    def unsubscribe(self) -> None:
        with self._feed._lock:
            self._feed._subscribers.pop(self._key, None)


class ChangeFeed:
    def __init__(self):
        self._subscribers: Dict[int, tuple] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def subscribe(
        self,
        table: str,
        callback: Callable[[ChangeEvent], None],
        room_id: Optional[int] = None,
        events: Iterable[str] = ALL_EVENTS,
    ) -> Subscription:
        """Deliver matching events to ``callback``; ``room_id=None`` means every room."""
        with self._lock:
            key = next(self._ids)
            self._subscribers[key] = (table, room_id, frozenset(events), callback)
        return Subscription(self, key)

    def publish(self, event: ChangeEvent) -> int:
        """Fan ``event`` out to subscribers; returns how many were called."""
        with self._lock:
            targets = [
                cb for (table, room_id, events, cb) in self._subscribers.values()
                if table == event.table
                and event.event_type in events
                and (room_id is None or room_id == event.room_id)
            ]
        for callback in targets:
            try:
                callback(event)
            except Exception:
                logger.exception(f"[feed] subscriber failed table={event.table} event={event.event_type} room={event.room_id}")
        return len(targets)

    def subscriber_count(self) -> int:
        return len(self._subscribers)
