"""Process-wide in-memory store used when no database is configured.

State lives only as long as the app object; nothing is persisted.
"""

import itertools
import threading
from dataclasses import replace

from charades.realtime.feed import (
    DELETE,
    DRAWING_STROKES,
    GUESSES,
    INSERT,
    ROOM_PLAYERS,
    ROOMS,
    UPDATE,
    USERS,
)
from charades.records import GuessRecord, PlayerRecord, RoomRecord, StrokeRecord, UserRecord, utcnow
from charades.store.base import Store


class MemoryStore(Store):
    name = 'memory'

    def __init__(self, feed=None):
        super().__init__(feed)
        self._lock = threading.RLock()
        self._users = {}
        self._rooms = {}
        self._players = {}
        self._guesses = {}
        self._strokes = {}
        self._ids = {t: itertools.count(1) for t in (USERS, ROOMS, ROOM_PLAYERS, GUESSES, DRAWING_STROKES)}

    def _next_id(self, table):
        return next(self._ids[table])

    def _with_user(self, record):
        user = self._users.get(record.user_id)
        return replace(record, user=replace(user) if user else None)

    # users
    def create_user(self, username, email=None, password_hash=None):
        now = utcnow()
        with self._lock:
            user = UserRecord(
                id=self._next_id(USERS),
                username=username,
                email=email,
                password_hash=password_hash,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            result = replace(user)
        self._publish(USERS, INSERT, None, new=result.to_dict())
        return result

    def get_user(self, user_id):
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def get_user_by_username(self, username):
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return replace(user)
        return None

    def update_user_stats(self, user_id, score_to_add):
        with self._lock:
            user = self._users.get(user_id)
            if not user:
                return None
            user.games_played += 1
            user.total_score += score_to_add
            user.updated_at = utcnow()
            result = replace(user)
        self._publish(USERS, UPDATE, None, new=result.to_dict())
        return result

    # rooms
    def create_room(self, code, name, host_id, **fields):
        now = utcnow()
        with self._lock:
            room = RoomRecord(id=self._next_id(ROOMS), code=code, name=name, host_id=host_id,
                              created_at=now, updated_at=now, **fields)
            self._rooms[room.id] = room
            result = replace(room)
        self._publish(ROOMS, INSERT, result.id, new=result.to_dict())
        return result

    def get_room(self, room_id):
        with self._lock:
            room = self._rooms.get(room_id)
            return replace(room) if room else None

    def get_room_by_code(self, code):
        code = (code or '').upper()
        with self._lock:
            for room in self._rooms.values():
                if room.code == code:
                    return replace(room)
        return None

    def list_rooms(self):
        with self._lock:
            return [replace(r) for r in self._rooms.values()]

    def update_room(self, room_id, **fields):
        with self._lock:
            room = self._rooms.get(room_id)
            if not room:
                return None
            old = room.to_dict()
            for key, value in fields.items():
                setattr(room, key, value)
            room.updated_at = utcnow()
            result = replace(room)
        self._publish(ROOMS, UPDATE, room_id, new=result.to_dict(), old=old)
        return result

    def delete_room(self, room_id):
        with self._lock:
            room = self._rooms.pop(room_id, None)
            if not room:
                return False
            for table in (self._players, self._guesses, self._strokes):
                for key in [k for k, v in table.items() if v.room_id == room_id]:
                    del table[key]
        self._publish(ROOMS, DELETE, room_id, old=room.to_dict())
        return True

    # players
    def add_player(self, room_id, user_id):
        with self._lock:
            player = PlayerRecord(id=self._next_id(ROOM_PLAYERS), room_id=room_id, user_id=user_id, joined_at=utcnow())
            self._players[player.id] = player
            result = self._with_user(player)
        self._publish(ROOM_PLAYERS, INSERT, room_id, new=result.to_dict())
        return result

    def _find_player(self, room_id, user_id):
        for player in self._players.values():
            if player.room_id == room_id and player.user_id == user_id:
                return player
        return None

    def get_player(self, room_id, user_id):
        with self._lock:
            player = self._find_player(room_id, user_id)
            return self._with_user(player) if player else None

    def list_players(self, room_id):
        with self._lock:
            players = sorted((p for p in self._players.values() if p.room_id == room_id), key=lambda p: p.id)
            return [self._with_user(p) for p in players]

    def update_player(self, room_id, user_id, **fields):
        with self._lock:
            player = self._find_player(room_id, user_id)
            if not player:
                return None
            for key, value in fields.items():
                setattr(player, key, value)
            result = self._with_user(player)
        self._publish(ROOM_PLAYERS, UPDATE, room_id, new=result.to_dict())
        return result

    def update_players(self, room_id, **fields):
        with self._lock:
            changed = []
            for player in self._players.values():
                if player.room_id != room_id:
                    continue
                for key, value in fields.items():
                    setattr(player, key, value)
                changed.append(self._with_user(player))
        for player in changed:
            self._publish(ROOM_PLAYERS, UPDATE, room_id, new=player.to_dict())
        return len(changed)

    def increment_player_score(self, room_id, user_id, points):
        with self._lock:
            player = self._find_player(room_id, user_id)
            if not player:
                return None
            player.score += points
            result = self._with_user(player)
        self._publish(ROOM_PLAYERS, UPDATE, room_id, new=result.to_dict())
        return result

    def remove_player(self, room_id, user_id):
        with self._lock:
            player = self._find_player(room_id, user_id)
            if not player:
                return False
            del self._players[player.id]
        self._publish(ROOM_PLAYERS, DELETE, room_id, old=player.to_dict())
        return True

    # guesses
    def add_guess(self, room_id, user_id, guess, is_correct):
        with self._lock:
            record = GuessRecord(id=self._next_id(GUESSES), room_id=room_id, user_id=user_id,
                                 guess=guess, is_correct=is_correct, created_at=utcnow())
            self._guesses[record.id] = record
            result = self._with_user(record)
        self._publish(GUESSES, INSERT, room_id, new=result.to_dict())
        return result

    def list_guesses(self, room_id):
        with self._lock:
            guesses = sorted((g for g in self._guesses.values() if g.room_id == room_id), key=lambda g: g.id)
            return [self._with_user(g) for g in guesses]

    # drawing strokes
    def add_stroke(self, room_id, user_id, stroke_data):
        with self._lock:
            record = StrokeRecord(id=self._next_id(DRAWING_STROKES), room_id=room_id, user_id=user_id,
                                  stroke_data=dict(stroke_data), created_at=utcnow())
            self._strokes[record.id] = record
            result = replace(record, stroke_data=dict(record.stroke_data))
        self._publish(DRAWING_STROKES, INSERT, room_id, new=result.to_dict())
        return result

    def list_strokes(self, room_id):
        with self._lock:
            strokes = sorted((s for s in self._strokes.values() if s.room_id == room_id), key=lambda s: s.id)
            return [replace(s, stroke_data=dict(s.stroke_data)) for s in strokes]

    def clear_strokes(self, room_id):
        with self._lock:
            removed = [self._strokes.pop(k) for k, v in list(self._strokes.items()) if v.room_id == room_id]
        for stroke in removed:
            self._publish(DRAWING_STROKES, DELETE, room_id, old=stroke.to_dict())
        return len(removed)
