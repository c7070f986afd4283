import random
import string

import pytest

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
from charades.services import rooms
from charades.words import WORDS


def test_generated_codes_are_six_uppercase_alphanumerics():
    allowed = set(string.ascii_uppercase + string.digits)
    rng = random.Random(7)
    for _ in range(500):
        code = rooms.generate_room_code(rng=rng)
        assert len(code) == 6
        assert set(code) <= allowed


def test_create_room_seats_host(store, users):
    ann = users[0]
    room, code = rooms.create_room(store, ann.id, ann.username, is_public=False)
    assert room.code == code
    assert room.name == "ann's Room"
    assert room.host_id == ann.id
    assert room.max_players == 8
    assert room.is_public is False
    assert room.is_active is False
    assert room.current_word in WORDS
    assert [p.user_id for p in store.list_players(room.id)] == [ann.id]


def test_create_room_regenerates_code_on_collision(store, users):
    ann, ben = users[0], users[1]
    first, _ = rooms.create_room(store, ann.id, ann.username, rng=random.Random(1))
    # Same seed would produce the same first code; the collision must be retried
    second, code = rooms.create_room(store, ben.id, ben.username, rng=random.Random(1))
    assert code != first.code
    assert len(code) == 6


def test_create_room_unknown_host(store):
    with pytest.raises(UserNotFound):
        rooms.create_room(store, 999, 'ghost')


def test_join_by_code_is_case_insensitive(store, users):
    ann, ben = users[0], users[1]
    room, code = rooms.create_room(store, ann.id, ann.username)
    joined = rooms.join_room_by_code(store, code.lower(), ben.id)
    assert joined.id == room.id
    assert store.count_players(room.id) == 2


def test_join_by_code_missing_room(store, users):
    with pytest.raises(RoomNotFound):
        rooms.join_room_by_code(store, 'ZZZZZZ', users[0].id)


def test_join_by_code_active_room(store, users):
    ann, ben, cat = users
    room, code = rooms.create_room(store, ann.id, ann.username)
    rooms.join_room_by_code(store, code, ben.id)
    rooms.start_game(store, room.id, ann.id)
    with pytest.raises(GameAlreadyStarted):
        rooms.join_room_by_code(store, code, cat.id)


def test_join_by_code_full_room(store, users):
    ann, ben, cat = users
    room, code = rooms.create_room(store, ann.id, ann.username, max_players=2)
    rooms.join_room_by_code(store, code, ben.id)
    with pytest.raises(RoomFull):
        rooms.join_room_by_code(store, code, cat.id)
    assert store.count_players(room.id) == 2


def test_join_by_code_already_member(store, users):
    ann = users[0]
    _, code = rooms.create_room(store, ann.id, ann.username)
    with pytest.raises(AlreadyInRoom):
        rooms.join_room_by_code(store, code, ann.id)


def test_join_random_picks_fullest_eligible_room(store):
    people = [store.create_user(f"user{i}") for i in range(12)]
    seeker = people[-1]

    small, _ = rooms.create_room(store, people[0].id, 'p0')
    busy, busy_code = rooms.create_room(store, people[1].id, 'p1')
    rooms.join_room_by_code(store, busy_code, people[2].id)
    private, private_code = rooms.create_room(store, people[3].id, 'p3', is_public=False)
    for p in people[4:6]:
        rooms.join_room_by_code(store, private_code, p.id)
    full, full_code = rooms.create_room(store, people[6].id, 'p6', max_players=2)
    rooms.join_room_by_code(store, full_code, people[7].id)
    active, active_code = rooms.create_room(store, people[8].id, 'p8')
    for p in people[9:11]:
        rooms.join_room_by_code(store, active_code, p.id)
    rooms.start_game(store, active.id, people[8].id)

    chosen = rooms.join_random_room(store, seeker.id)
    assert chosen.id == busy.id
    assert store.get_player(busy.id, seeker.id) is not None
    assert store.get_player(small.id, seeker.id) is None


def test_join_random_skips_rooms_caller_is_in(store, users):
    ann, ben = users[0], users[1]
    _, code = rooms.create_room(store, ann.id, ann.username)
    rooms.join_room_by_code(store, code, ben.id)
    with pytest.raises(NoAvailableRooms):
        rooms.join_random_room(store, ben.id)


def test_join_random_without_rooms(store, users):
    with pytest.raises(NoAvailableRooms):
        rooms.join_random_room(store, users[0].id)


def test_leave_reassigns_host_to_remaining_member(store, users):
    ann, ben, cat = users
    room, code = rooms.create_room(store, ann.id, ann.username)
    rooms.join_room_by_code(store, code, ben.id)
    rooms.join_room_by_code(store, code, cat.id)

    view = rooms.leave_room(store, room.id, ann.id)
    member_ids = {p.user_id for p in view.players}
    assert view.room.host_id in member_ids
    assert view.room.host_id == ben.id
    assert ann.id not in member_ids


def test_leave_by_last_player_deletes_room(store, users):
    ann = users[0]
    room, code = rooms.create_room(store, ann.id, ann.username)
    assert rooms.leave_room(store, room.id, ann.id) is None
    assert store.get_room(room.id) is None
    assert store.get_room_by_code(code) is None
    with pytest.raises(RoomNotFound):
        rooms.get_room_with_players(store, room.id)


def test_leave_unknown_room_is_noop(store, users):
    assert rooms.leave_room(store, 404, users[0].id) is None


def test_leave_by_drawer_hands_turn_to_a_member(store, users):
    ann, ben, cat = users
    room, code = rooms.create_room(store, ann.id, ann.username)
    rooms.join_room_by_code(store, code, ben.id)
    rooms.join_room_by_code(store, code, cat.id)
    started = rooms.start_game(store, room.id, ann.id)
    drawer_id = started.room.current_drawer_id

    view = rooms.leave_room(store, room.id, drawer_id)
    member_ids = {p.user_id for p in view.players}
    assert view.room.current_drawer_id in member_ids
    assert [p.user_id for p in view.players if p.is_drawing] == [view.room.current_drawer_id]


def test_start_game_needs_two_players(store, users):
    ann = users[0]
    room, _ = rooms.create_room(store, ann.id, ann.username)
    with pytest.raises(NotEnoughPlayers) as excinfo:
        rooms.start_game(store, room.id, ann.id)
    assert 'at least 2 players' in str(excinfo.value)
    assert store.get_room(room.id).is_active is False


def test_start_game_picks_exactly_one_drawer(store, users):
    ann, ben, cat = users
    room, code = rooms.create_room(store, ann.id, ann.username)
    rooms.join_room_by_code(store, code, ben.id)
    rooms.join_room_by_code(store, code, cat.id)
    store.update_player(room.id, ben.id, has_guessed=True)
    store.update_room(room.id, time_left=12, round_number=4)

    view = rooms.start_game(store, room.id, ann.id, rng=random.Random(3))
    drawers = [p for p in view.players if p.is_drawing]
    assert len(drawers) == 1
    assert view.room.current_drawer_id == drawers[0].user_id
    assert all(not p.has_guessed for p in view.players)
    assert view.room.is_active is True
    assert view.room.time_left == 600
    assert view.room.round_number == 1


def test_only_the_host_can_start(store, users):
    ann, ben, cat = users
    room, code = rooms.create_room(store, ann.id, ann.username)
    rooms.join_room_by_code(store, code, ben.id)

    for outsider in (ben, cat):
        with pytest.raises(NotRoomHost):
            rooms.start_game(store, room.id, outsider.id)
    assert store.get_room(room.id).is_active is False

    rooms.start_game(store, room.id, ann.id)
    assert store.get_room(room.id).is_active is True


def test_start_game_twice_is_rejected(store, users):
    ann, ben = users[0], users[1]
    room, code = rooms.create_room(store, ann.id, ann.username)
    rooms.join_room_by_code(store, code, ben.id)
    rooms.start_game(store, room.id, ann.id)
    with pytest.raises(GameAlreadyStarted):
        rooms.start_game(store, room.id, ann.id)


def test_public_rooms_lists_only_public_lobbies(store, users):
    ann, ben, cat = users
    open_room, _ = rooms.create_room(store, ann.id, ann.username)
    rooms.create_room(store, ben.id, ben.username, is_public=False)
    assert [v.room.id for v in rooms.list_public_rooms(store)] == [open_room.id]
