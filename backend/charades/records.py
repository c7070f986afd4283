"""Plain records exchanged between the stores and the game services.

Both storage backends hand out these dataclasses rather than ORM rows, so the
services work the same against the database and the in-memory fallback.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class UserRecord:
    id: int
    username: str
    email: Optional[str] = None
    password_hash: Optional[str] = None
    games_played: int = 0
    total_score: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_anonymous_account(self) -> bool:
        return self.password_hash is None

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'games_played': self.games_played,
            'total_score': self.total_score,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }


@dataclass
class RoomRecord:
    id: int
    code: str
    name: str
    host_id: int
    max_players: int = 8
    is_active: bool = False
    is_public: bool = True
    current_word: Optional[str] = None
    current_drawer_id: Optional[int] = None
    time_left: int = 600
    round_number: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self, include_word=True):
        data = {
            'id': self.id,
            'code': self.code,
            'name': self.name,
            'host_id': self.host_id,
            'max_players': self.max_players,
            'is_active': self.is_active,
            'is_public': self.is_public,
            'current_drawer_id': self.current_drawer_id,
            'time_left': self.time_left,
            'round_number': self.round_number,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }
        if include_word:
            data['current_word'] = self.current_word
        return data


@dataclass
class PlayerRecord:
    id: int
    room_id: int
    user_id: int
    score: int = 0
    is_drawing: bool = False
    has_guessed: bool = False
    joined_at: Optional[datetime] = None
    user: Optional[UserRecord] = None

    def to_dict(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'user_id': self.user_id,
            'score': self.score,
            'is_drawing': self.is_drawing,
            'has_guessed': self.has_guessed,
            'joined_at': _iso(self.joined_at),
            'user': self.user.to_dict() if self.user else None,
        }


@dataclass
class GuessRecord:
    id: int
    room_id: int
    user_id: int
    guess: str
    is_correct: bool = False
    created_at: Optional[datetime] = None
    user: Optional[UserRecord] = None

    def to_dict(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'user_id': self.user_id,
            'guess': self.guess,
            'is_correct': self.is_correct,
            'created_at': _iso(self.created_at),
            'user': self.user.to_dict() if self.user else None,
        }


@dataclass
class StrokeRecord:
    id: int
    room_id: int
    user_id: int
    stroke_data: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def to_dict(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'user_id': self.user_id,
            'stroke_data': dict(self.stroke_data),
            'created_at': _iso(self.created_at),
        }


@dataclass
class RoomView:
    """A room together with its current roster, in join order."""
    room: RoomRecord
    players: list

    @property
    def player_count(self) -> int:
        return len(self.players)

    def to_dict(self, include_word=True):
        data = self.room.to_dict(include_word=include_word)
        data['players'] = [p.to_dict() for p in self.players]
        return data
