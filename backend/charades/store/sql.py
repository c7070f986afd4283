import functools
import logging

from sqlalchemy.exc import SQLAlchemyError

from charades import db
from charades.errors import StoreError
from charades.models import DrawingStroke, Guess, Room, RoomPlayer, User
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
from charades.records import utcnow
from charades.store.base import Store

logger = logging.getLogger(__name__)


def _guarded(method):
    """Roll back and raise StoreError when the database call fails."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.error(f"[store-error] op={method.__name__} error={exc}")
            raise StoreError() from exc
    return wrapper


class SqlStore(Store):
    """Store backed by the Flask-SQLAlchemy session; needs an app context."""

    name = 'sql'

    # users
    @_guarded
    def create_user(self, username, email=None, password_hash=None):
        user = User(username=username, email=email, password_hash=password_hash, games_played=0, total_score=0)
        db.session.add(user)
        db.session.commit()
        record = user.to_record()
        self._publish(USERS, INSERT, None, new=record.to_dict())
        return record

    @_guarded
    def get_user(self, user_id):
        user = db.session.get(User, user_id)
        return user.to_record() if user else None

    @_guarded
    def get_user_by_username(self, username):
        user = User.query.filter_by(username=username).first()
        return user.to_record() if user else None

    @_guarded
    def update_user_stats(self, user_id, score_to_add):
        updated = User.query.filter_by(id=user_id).update({
            User.games_played: User.games_played + 1,
            User.total_score: User.total_score + score_to_add,
            User.updated_at: utcnow(),
        }, synchronize_session=False)
        db.session.commit()
        if not updated:
            return None
        record = db.session.get(User, user_id, populate_existing=True).to_record()
        self._publish(USERS, UPDATE, None, new=record.to_dict())
        return record

    # rooms
    @_guarded
    def create_room(self, code, name, host_id, **fields):
        room = Room(code=code, name=name, host_id=host_id, **fields)
        db.session.add(room)
        db.session.commit()
        record = room.to_record()
        self._publish(ROOMS, INSERT, record.id, new=record.to_dict())
        return record

    @_guarded
    def get_room(self, room_id):
        room = db.session.get(Room, room_id)
        return room.to_record() if room else None

    @_guarded
    def get_room_by_code(self, code):
        room = Room.query.filter_by(code=(code or '').upper()).first()
        return room.to_record() if room else None

    @_guarded
    def list_rooms(self):
        return [r.to_record() for r in Room.query.order_by(Room.id).all()]

    @_guarded
    def update_room(self, room_id, **fields):
        room = db.session.get(Room, room_id)
        if not room:
            return None
        old = room.to_record().to_dict()
        for key, value in fields.items():
            setattr(room, key, value)
        db.session.add(room)
        db.session.commit()
        record = room.to_record()
        self._publish(ROOMS, UPDATE, room_id, new=record.to_dict(), old=old)
        return record

    @_guarded
    def delete_room(self, room_id):
        room = db.session.get(Room, room_id)
        if not room:
            return False
        old = room.to_record().to_dict()
        DrawingStroke.query.filter_by(room_id=room_id).delete(synchronize_session=False)
        Guess.query.filter_by(room_id=room_id).delete(synchronize_session=False)
        RoomPlayer.query.filter_by(room_id=room_id).delete(synchronize_session=False)
        db.session.delete(room)
        db.session.commit()
        self._publish(ROOMS, DELETE, room_id, old=old)
        return True

    # players
    def _player(self, room_id, user_id):
        return RoomPlayer.query.filter_by(room_id=room_id, user_id=user_id).first()

    @_guarded
    def add_player(self, room_id, user_id):
        player = RoomPlayer(room_id=room_id, user_id=user_id, score=0, is_drawing=False, has_guessed=False)
        db.session.add(player)
        db.session.commit()
        record = player.to_record()
        self._publish(ROOM_PLAYERS, INSERT, room_id, new=record.to_dict())
        return record

    @_guarded
    def get_player(self, room_id, user_id):
        player = self._player(room_id, user_id)
        return player.to_record() if player else None

    @_guarded
    def list_players(self, room_id):
        players = RoomPlayer.query.filter_by(room_id=room_id).order_by(RoomPlayer.id).all()
        return [p.to_record() for p in players]

    @_guarded
    def count_players(self, room_id):
        return RoomPlayer.query.filter_by(room_id=room_id).count()

    @_guarded
    def update_player(self, room_id, user_id, **fields):
        player = self._player(room_id, user_id)
        if not player:
            return None
        for key, value in fields.items():
            setattr(player, key, value)
        db.session.add(player)
        db.session.commit()
        record = player.to_record()
        self._publish(ROOM_PLAYERS, UPDATE, room_id, new=record.to_dict())
        return record

    @_guarded
    def update_players(self, room_id, **fields):
        players = RoomPlayer.query.filter_by(room_id=room_id).order_by(RoomPlayer.id).all()
        for player in players:
            for key, value in fields.items():
                setattr(player, key, value)
            db.session.add(player)
        db.session.commit()
        for player in players:
            self._publish(ROOM_PLAYERS, UPDATE, room_id, new=player.to_record().to_dict())
        return len(players)

    @_guarded
    def increment_player_score(self, room_id, user_id, points):
        updated = RoomPlayer.query.filter_by(room_id=room_id, user_id=user_id).update(
            {RoomPlayer.score: RoomPlayer.score + points}, synchronize_session=False
        )
        db.session.commit()
        if not updated:
            return None
        player = self._player(room_id, user_id)
        db.session.refresh(player)
        record = player.to_record()
        self._publish(ROOM_PLAYERS, UPDATE, room_id, new=record.to_dict())
        return record

    @_guarded
    def remove_player(self, room_id, user_id):
        player = self._player(room_id, user_id)
        if not player:
            return False
        old = player.to_record().to_dict()
        db.session.delete(player)
        db.session.commit()
        self._publish(ROOM_PLAYERS, DELETE, room_id, old=old)
        return True

    # guesses
    @_guarded
    def add_guess(self, room_id, user_id, guess, is_correct):
        row = Guess(room_id=room_id, user_id=user_id, guess=guess, is_correct=is_correct)
        db.session.add(row)
        db.session.commit()
        record = row.to_record()
        self._publish(GUESSES, INSERT, room_id, new=record.to_dict())
        return record

    @_guarded
    def list_guesses(self, room_id):
        rows = Guess.query.filter_by(room_id=room_id).order_by(Guess.created_at, Guess.id).all()
        return [g.to_record() for g in rows]

    # drawing strokes
    @_guarded
    def add_stroke(self, room_id, user_id, stroke_data):
        row = DrawingStroke(room_id=room_id, user_id=user_id, stroke_data=dict(stroke_data))
        db.session.add(row)
        db.session.commit()
        record = row.to_record()
        self._publish(DRAWING_STROKES, INSERT, room_id, new=record.to_dict())
        return record

    @_guarded
    def list_strokes(self, room_id):
        rows = DrawingStroke.query.filter_by(room_id=room_id).order_by(DrawingStroke.id).all()
        return [s.to_record() for s in rows]

    @_guarded
    def clear_strokes(self, room_id):
        rows = DrawingStroke.query.filter_by(room_id=room_id).order_by(DrawingStroke.id).all()
        removed = [s.to_record() for s in rows]
        DrawingStroke.query.filter_by(room_id=room_id).delete(synchronize_session=False)
        db.session.commit()
        for stroke in removed:
            self._publish(DRAWING_STROKES, DELETE, room_id, old=stroke.to_dict())
        return len(removed)
