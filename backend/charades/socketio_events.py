from flask_socketio import emit, join_room, leave_room

from charades import socketio
from charades.realtime.feed import DRAWING_STROKES, GUESSES, INSERT, ROOM_PLAYERS, ROOMS

NAMESPACE = '/ws'


def channel_for(room_id) -> str:
    return f"room:{room_id}"


def _room_id_from(data):
    room_id = (data or {}).get('room_id')
    try:
        return int(room_id)
    except (TypeError, ValueError):
        return None


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_room(data):
    room_id = _room_id_from(data)
    if room_id is None:
        emit('error', {'message': 'room_id is required'})
        return
    channel = channel_for(room_id)
    join_room(channel)
    emit('joined', {'room': channel})


def handle_leave_room(data):
    room_id = _room_id_from(data)
    if room_id is None:
        emit('error', {'message': 'room_id is required'})
        return
    channel = channel_for(room_id)
    leave_room(channel)
    emit('left', {'room': channel})


def handle_ping(data):
    emit('pong', data or {})


# ---- Store change relay ----

def _relay_room_change(event):
    socketio.emit(
        'room_changed',
        {'room_id': event.room_id, 'table': event.table, 'eventType': event.event_type},
        to=channel_for(event.room_id),
        namespace=NAMESPACE,
    )


def _relay_guess(event):
    socketio.emit(
        'guess_added',
        {'room_id': event.room_id, 'guess_id': (event.new or {}).get('id')},
        to=channel_for(event.room_id),
        namespace=NAMESPACE,
    )


def _relay_stroke(event):
    # Forward the raw payload so clients can draw without refetching
    socketio.emit(
        'drawing_stroke',
        (event.new or {}).get('stroke_data') or {},
        to=channel_for(event.room_id),
        namespace=NAMESPACE,
    )


def register_change_relay(feed):
    """Push every room-scoped store change to the room's Socket.IO channel."""
    return [
        feed.subscribe(ROOMS, _relay_room_change),
        feed.subscribe(ROOM_PLAYERS, _relay_room_change),
        feed.subscribe(GUESSES, _relay_guess, events=(INSERT,)),
        feed.subscribe(DRAWING_STROKES, _relay_stroke, events=(INSERT,)),
    ]


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = [NAMESPACE, '/'] if testing else [NAMESPACE]
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_room', handle_join_room, namespace=namespace)
        socketio.on_event('leave_room', handle_leave_room, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
