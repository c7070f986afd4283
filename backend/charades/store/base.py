import abc
from typing import Any, Dict, List, Optional

from charades.realtime.feed import ChangeEvent, ChangeFeed
from charades.records import GuessRecord, PlayerRecord, RoomRecord, StrokeRecord, UserRecord


class Store(abc.ABC):
    """Storage capability shared by the database and in-memory backends.

    Implementations return records (never live rows) and publish a
    ``ChangeEvent`` on ``self.feed`` after each mutation is durable.
    """

    name = 'abstract'

    def __init__(self, feed: Optional[ChangeFeed] = None):
        self.feed = feed or ChangeFeed()

    def _publish(self, table, event_type, room_id, new=None, old=None) -> None:
        self.feed.publish(ChangeEvent(table=table, event_type=event_type, room_id=room_id, new=new, old=old))

    # users
    @abc.abstractmethod
    def create_user(self, username: str, email: Optional[str] = None, password_hash: Optional[str] = None) -> UserRecord:
        ...

    @abc.abstractmethod
    def get_user(self, user_id: int) -> Optional[UserRecord]:
        ...

    @abc.abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        ...

    @abc.abstractmethod
    def update_user_stats(self, user_id: int, score_to_add: int) -> Optional[UserRecord]:
        """Count one more game played and add ``score_to_add`` to the lifetime total."""

    # rooms
    @abc.abstractmethod
    def create_room(self, code: str, name: str, host_id: int, **fields: Any) -> RoomRecord:
        ...

    @abc.abstractmethod
    def get_room(self, room_id: int) -> Optional[RoomRecord]:
        ...

    @abc.abstractmethod
    def get_room_by_code(self, code: str) -> Optional[RoomRecord]:
        ...

    @abc.abstractmethod
    def list_rooms(self) -> List[RoomRecord]:
        ...

    @abc.abstractmethod
    def update_room(self, room_id: int, **fields: Any) -> Optional[RoomRecord]:
        ...

    @abc.abstractmethod
    def delete_room(self, room_id: int) -> bool:
        """Delete the room and everything hanging off it."""

    # players
    @abc.abstractmethod
    def add_player(self, room_id: int, user_id: int) -> PlayerRecord:
        ...

    @abc.abstractmethod
    def get_player(self, room_id: int, user_id: int) -> Optional[PlayerRecord]:
        ...

    @abc.abstractmethod
    def list_players(self, room_id: int) -> List[PlayerRecord]:
        """Players of the room in join order, each with its user attached."""

    @abc.abstractmethod
    def update_player(self, room_id: int, user_id: int, **fields: Any) -> Optional[PlayerRecord]:
        ...

    @abc.abstractmethod
    def update_players(self, room_id: int, **fields: Any) -> int:
        ...

    @abc.abstractmethod
    def increment_player_score(self, room_id: int, user_id: int, points: int) -> Optional[PlayerRecord]:
        ...

    @abc.abstractmethod
    def remove_player(self, room_id: int, user_id: int) -> bool:
        ...

    def count_players(self, room_id: int) -> int:
        return len(self.list_players(room_id))

    # guesses
    @abc.abstractmethod
    def add_guess(self, room_id: int, user_id: int, guess: str, is_correct: bool) -> GuessRecord:
        ...

    @abc.abstractmethod
    def list_guesses(self, room_id: int) -> List[GuessRecord]:
        """Guesses of the room, oldest first, each with its user attached."""

    # drawing strokes
    @abc.abstractmethod
    def add_stroke(self, room_id: int, user_id: int, stroke_data: Dict[str, Any]) -> StrokeRecord:
        ...

    @abc.abstractmethod
    def list_strokes(self, room_id: int) -> List[StrokeRecord]:
        ...

    @abc.abstractmethod
    def clear_strokes(self, room_id: int) -> int:
        ...
