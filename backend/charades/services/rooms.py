"""Room lifecycle: create, join, quick join, leave and start.

A room starts in the lobby (``is_active`` false) and becomes active once a
game is started. No transition back to the lobby exists.
"""

import logging
import random
import string

from charades.errors import (
    AlreadyInRoom,
    GameAlreadyStarted,
    NoAvailableRooms,
    NotEnoughPlayers,
    NotRoomHost,
    RoomFull,
    RoomNotFound,
    UserNotFound,
)
from charades.records import RoomView
from charades.words import random_word

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 6
MAX_PLAYERS = 8
MIN_PLAYERS = 2
ROUND_DURATION = 600


def generate_room_code(length=CODE_LENGTH, rng=random) -> str:
    return ''.join(rng.choice(CODE_ALPHABET) for _ in range(length))


def _unique_room_code(store, rng=random) -> str:
    while True:
        code = generate_room_code(rng=rng)
        if not store.get_room_by_code(code):
            return code


def create_room(store, host_id, host_name, is_public=True, max_players=MAX_PLAYERS, rng=random):
    """Open a lobby with the host as its only player. Returns ``(room, code)``."""
    if not store.get_user(host_id):
        raise UserNotFound()
    code = _unique_room_code(store, rng=rng)
    room = store.create_room(
        code=code,
        name=f"{host_name}'s Room",
        host_id=host_id,
        max_players=max_players,
        is_public=bool(is_public),
        is_active=False,
        current_word=random_word(rng),
        time_left=ROUND_DURATION,
        round_number=1,
    )
    store.add_player(room.id, host_id)
    logger.info(f"[room-create] room={room.id} code={code} host={host_id} public={room.is_public}")
    return room, code


def get_room_with_players(store, room_id) -> RoomView:
    room = store.get_room(room_id)
    if not room:
        raise RoomNotFound()
    return RoomView(room=room, players=store.list_players(room_id))


def list_public_rooms(store):
    """Public rooms still waiting in the lobby."""
    return [
        RoomView(room=room, players=store.list_players(room.id))
        for room in store.list_rooms()
        if room.is_public and not room.is_active
    ]


def _add_member(store, room, user_id):
    if not store.get_user(user_id):
        raise UserNotFound()
    player = store.add_player(room.id, user_id)
    logger.info(f"[room-join] room={room.id} code={room.code} user={user_id}")
    return player


def join_room_by_code(store, code, user_id):
    room = store.get_room_by_code((code or '').strip())
    if not room:
        raise RoomNotFound()
    if room.is_active:
        raise GameAlreadyStarted()
    if store.count_players(room.id) >= room.max_players:
        raise RoomFull()
    if store.get_player(room.id, user_id):
        raise AlreadyInRoom()
    _add_member(store, room, user_id)
    return room


def join_random_room(store, user_id):
    """Quick join: the joinable public lobby with the most players.

    Ties go to the first candidate in store order.
    """
    best = None
    for view in list_public_rooms(store):
        if view.player_count < 1 or view.player_count >= view.room.max_players:
            continue
        if any(p.user_id == user_id for p in view.players):
            continue
        if best is None or view.player_count > best.player_count:
            best = view
    if best is None:
        raise NoAvailableRooms()
    _add_member(store, best.room, user_id)
    return best.room


def leave_room(store, room_id, user_id):
    """Remove the player. Returns the remaining room view, or None once deleted."""
    room = store.get_room(room_id)
    if not room:
        return None
    store.remove_player(room_id, user_id)
    remaining = store.list_players(room_id)
    if not remaining:
        store.delete_room(room_id)
        logger.info(f"[room-delete] room={room_id} code={room.code} last player left")
        return None

    changes = {}
    if room.host_id == user_id:
        changes['host_id'] = remaining[0].user_id
        logger.info(f"[room-host] room={room_id} host {user_id} -> {changes['host_id']}")
    if room.current_drawer_id == user_id:
        # Drawing turn follows the same rule as the host seat
        new_drawer = remaining[0].user_id
        changes['current_drawer_id'] = new_drawer
        store.update_player(room_id, new_drawer, is_drawing=True)
    if changes:
        room = store.update_room(room_id, **changes)
    return RoomView(room=room, players=store.list_players(room_id))


def start_game(store, room_id, user_id, duration=ROUND_DURATION, min_players=MIN_PLAYERS, rng=random):
    """Host only. Picks a random drawer and starts the clock."""
    room = store.get_room(room_id)
    if not room:
        raise RoomNotFound()
    if room.host_id != user_id:
        raise NotRoomHost()
    if room.is_active:
        raise GameAlreadyStarted()
    players = store.list_players(room_id)
    if len(players) < min_players:
        raise NotEnoughPlayers(f"Need at least {min_players} players to start")

    drawer = rng.choice(players)
    store.update_players(room_id, is_drawing=False, has_guessed=False)
    store.update_player(room_id, drawer.user_id, is_drawing=True)
    room = store.update_room(
        room_id,
        is_active=True,
        current_drawer_id=drawer.user_id,
        time_left=duration,
        round_number=1,
    )
    logger.info(f"[game-start] room={room_id} drawer={drawer.user_id} players={len(players)}")
    return RoomView(room=room, players=store.list_players(room_id))
