import logging

from charades.errors import CharadesError
from charades.realtime.feed import DRAWING_STROKES, GUESSES, INSERT, ROOM_PLAYERS, ROOMS
from charades.services import drawing, guesses, rooms
from charades.services.guesses import GuessResult

logger = logging.getLogger(__name__)


class RoomSession:
    """One player's live view of a room.

    Mirrors what a browser client keeps: the room, its players and its
    guesses, fully reloaded whenever the feed reports a change. Stroke
    events are not reloaded; their payload goes straight to ``on_stroke``.
    Action failures land in ``error`` instead of propagating.
    """

    def __init__(self, store, room_id, user_id, on_stroke=None):
        self.store = store
        self.room_id = room_id
        self.user_id = user_id
        self.on_stroke = on_stroke
        self.room = None
        self.players = []
        self.guesses = []
        self.error = None
        self._subscriptions = []

    @property
    def is_open(self):
        return bool(self._subscriptions)

    def open(self):
        self.reload()
        feed = self.store.feed
        self._subscriptions = [
            feed.subscribe(ROOM_PLAYERS, self._on_room_change, room_id=self.room_id),
            feed.subscribe(ROOMS, self._on_room_change, room_id=self.room_id),
            feed.subscribe(GUESSES, self._on_guess, room_id=self.room_id, events=(INSERT,)),
            feed.subscribe(DRAWING_STROKES, self._on_stroke, room_id=self.room_id, events=(INSERT,)),
        ]
        return self

    def close(self):
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.close()

    def reload(self):
        try:
            view = rooms.get_room_with_players(self.store, self.room_id)
            self.room = view.room
            self.players = view.players
            self.guesses = guesses.list_guesses(self.store, self.room_id)
        except CharadesError as exc:
            self.error = str(exc)

    def _on_room_change(self, event):
        logger.debug(f"[session] room update room={self.room_id} table={event.table} event={event.event_type}")
        self.reload()

    def _on_guess(self, event):
        self.guesses = guesses.list_guesses(self.store, self.room_id)

    def _on_stroke(self, event):
        if self.on_stroke and event.new:
            self.on_stroke(event.new.get('stroke_data') or {})

    # actions
    def submit_guess(self, text):
        try:
            return guesses.submit_guess(self.store, self.room_id, self.user_id, text)
        except CharadesError as exc:
            self.error = str(exc)
            return GuessResult(is_correct=False, points=0)

    def start_game(self):
        try:
            rooms.start_game(self.store, self.room_id, self.user_id)
        except CharadesError as exc:
            self.error = str(exc)

    def leave_room(self):
        self.close()
        try:
            rooms.leave_room(self.store, self.room_id, self.user_id)
        except CharadesError as exc:
            self.error = str(exc)

    def save_drawing_stroke(self, stroke):
        try:
            return drawing.save_drawing_stroke(self.store, self.room_id, self.user_id, stroke)
        except CharadesError as exc:
            logger.error(f"Failed to save drawing stroke: {exc}")
            return False

    def clear_drawing(self):
        try:
            return drawing.clear_drawing(self.store, self.room_id, self.user_id)
        except CharadesError as exc:
            logger.error(f"Failed to clear drawing: {exc}")
            return False
