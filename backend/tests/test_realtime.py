
from charades.realtime.feed import (
    DELETE,
    GUESSES,
    INSERT,
    ROOM_PLAYERS,
    ROOMS,
    UPDATE,
    ChangeEvent,
    ChangeFeed,
)
from charades.realtime.session import RoomSession
from charades.services import rooms


def test_feed_filters_by_table_room_and_event():
    feed = ChangeFeed()
    seen = []
    feed.subscribe(GUESSES, seen.append, room_id=1, events=(INSERT,))

    feed.publish(ChangeEvent(GUESSES, INSERT, 1, new={'id': 1}))
    feed.publish(ChangeEvent(GUESSES, INSERT, 2, new={'id': 2}))
    feed.publish(ChangeEvent(GUESSES, DELETE, 1, old={'id': 1}))
    feed.publish(ChangeEvent(ROOMS, INSERT, 1, new={'id': 1}))

    assert [e.new['id'] for e in seen] == [1]


def test_feed_wildcard_room_and_unsubscribe():
    feed = ChangeFeed()
    seen = []
    sub = feed.subscribe(ROOMS, seen.append)
    feed.publish(ChangeEvent(ROOMS, UPDATE, 5))
    feed.publish(ChangeEvent(ROOMS, UPDATE, 6))
    assert sub.active
    sub.unsubscribe()
    assert not sub.active
    assert feed.publish(ChangeEvent(ROOMS, UPDATE, 7)) == 0
    assert [e.room_id for e in seen] == [5, 6]


def test_feed_keeps_delivering_when_a_subscriber_fails():
    feed = ChangeFeed()
    seen = []

    def explode(event):
        raise RuntimeError('boom')

    feed.subscribe(ROOMS, explode)
    feed.subscribe(ROOMS, seen.append)
    assert feed.publish(ChangeEvent(ROOMS, INSERT, 1)) == 2
    assert len(seen) == 1


def test_store_publishes_row_events(store, users):
    ann, ben = users[0], users[1]
    events = []
    store.feed.subscribe(ROOMS, events.append)
    store.feed.subscribe(ROOM_PLAYERS, events.append)

    room, code = rooms.create_room(store, ann.id, ann.username)
    rooms.join_room_by_code(store, code, ben.id)
    rooms.leave_room(store, room.id, ben.id)
    rooms.leave_room(store, room.id, ann.id)

    assert [(e.table, e.event_type) for e in events] == [
        (ROOMS, INSERT),
        (ROOM_PLAYERS, INSERT),
        (ROOM_PLAYERS, INSERT),
        (ROOM_PLAYERS, DELETE),
        (ROOM_PLAYERS, DELETE),
        (ROOMS, DELETE),
    ]
    assert all(e.room_id == room.id for e in events)


def test_room_session_reloads_on_changes(store, users):
    ann, ben, cat = users
    room, code = rooms.create_room(store, ann.id, ann.username)
    strokes = []

    with RoomSession(store, room.id, ann.id, on_stroke=strokes.append) as session:
        assert [p.user_id for p in session.players] == [ann.id]

        rooms.join_room_by_code(store, code, ben.id)
        assert [p.user_id for p in session.players] == [ann.id, ben.id]

        session.start_game()
        assert session.error is None
        assert session.room.is_active is True
        assert sum(p.is_drawing for p in session.players) == 1

        store.update_room(room.id, current_word='moon')
        guesser_id = ben.id if session.room.current_drawer_id == ann.id else ann.id
        result = RoomSession(store, room.id, guesser_id).submit_guess('Moon')
        assert result.is_correct
        assert [g.guess for g in session.guesses] == ['Moon']
        assert next(p for p in session.players if p.user_id == guesser_id).score == result.points

        assert session.save_drawing_stroke({'type': 'start', 'x': 1, 'y': 1}) is True
        assert strokes == [{'type': 'start', 'x': 1, 'y': 1, 'color': '#000000', 'size': 5, 'tool': 'pen'}]

    assert session.is_open is False
    store.update_room(room.id, time_left=1)
    assert session.room.time_left == 600


def test_room_session_captures_failures(store, users):
    ann = users[0]
    room, _ = rooms.create_room(store, ann.id, ann.username)
    session = RoomSession(store, room.id, ann.id).open()

    session.start_game()
    assert session.error == 'Need at least 2 players to start'

    session.leave_room()
    assert session.is_open is False
    assert store.get_room(room.id) is None

    result = session.submit_guess('anything')
    assert (result.is_correct, result.points) == (False, 0)
    assert session.error == 'Room not found'
