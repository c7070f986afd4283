from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from charades.errors import CharadesError, InvalidStroke
from charades.services import drawing, guesses
from charades.services import rooms as room_service
from charades.services.timer import schedule_countdown
from charades.store import get_store

rooms = Blueprint('rooms', __name__)


@rooms.before_request
@login_required
def require_login():
    """Every room route acts on behalf of the logged-in user."""


@rooms.errorhandler(CharadesError)
def handle_game_error(exc):
    current_app.logger.info(f"[room-error] {exc.__class__.__name__}: {exc}")
    return jsonify(exc.to_dict()), exc.status_code


def _room_payload(view):
    # The secret word only goes to whoever is drawing it
    return view.to_dict(include_word=view.room.current_drawer_id == current_user.id)


@rooms.route('', methods=['POST'])
def create_room():
    """
    Opens a new lobby with the current user as host and only player.
    """
    data = request.get_json(silent=True) or {}
    is_public = data.get('is_public', True)
    if not isinstance(is_public, bool):
        return jsonify({'error': 'is_public must be true or false'}), 400
    store = get_store()
    room, code = room_service.create_room(
        store,
        current_user.id,
        current_user.username,
        is_public=is_public,
        max_players=current_app.config.get('MAX_PLAYERS', room_service.MAX_PLAYERS),
    )
    view = room_service.get_room_with_players(store, room.id)
    return jsonify({'message': 'New room created!', 'code': code, 'room': _room_payload(view)}), 201


@rooms.route('/public', methods=['GET'])
def public_rooms():
    views = room_service.list_public_rooms(get_store())
    return jsonify([v.to_dict(include_word=False) for v in views])


@rooms.route('/join', methods=['POST'])
def join_room():
    data = request.get_json(silent=True) or {}
    code = data.get('code')
    if not code:
        return jsonify({'error': 'Room code is required'}), 400
    store = get_store()
    room = room_service.join_room_by_code(store, code, current_user.id)
    view = room_service.get_room_with_players(store, room.id)
    return jsonify(_room_payload(view))


@rooms.route('/quick-join', methods=['POST'])
def quick_join():
    store = get_store()
    room = room_service.join_random_room(store, current_user.id)
    view = room_service.get_room_with_players(store, room.id)
    return jsonify(_room_payload(view))


@rooms.route('/<int:room_id>', methods=['GET'])
def get_room(room_id):
    view = room_service.get_room_with_players(get_store(), room_id)
    return jsonify(_room_payload(view))


@rooms.route('/<int:room_id>/leave', methods=['POST'])
def leave_room(room_id):
    """
    Removes the current user from the room. If the last player leaves,
    the room and all related data is deleted.
    """
    view = room_service.leave_room(get_store(), room_id, current_user.id)
    return jsonify({'message': 'You have left the room.', 'room': view.to_dict(include_word=False) if view else None})


@rooms.route('/<int:room_id>/start', methods=['POST'])
def start_game(room_id):
    cfg = current_app.config
    view = room_service.start_game(
        get_store(),
        room_id,
        current_user.id,
        duration=int(cfg.get('ROUND_DURATION_SEC', room_service.ROUND_DURATION)),
        min_players=int(cfg.get('MIN_PLAYERS', room_service.MIN_PLAYERS)),
    )
    schedule_countdown(current_app._get_current_object(), room_id)
    return jsonify(_room_payload(view))


@rooms.route('/<int:room_id>/guesses', methods=['GET'])
def list_guesses(room_id):
    return jsonify([g.to_dict() for g in guesses.list_guesses(get_store(), room_id)])


@rooms.route('/<int:room_id>/guesses', methods=['POST'])
def submit_guess(room_id):
    data = request.get_json(silent=True) or {}
    text = (data.get('guess') or '').strip()
    if not text:
        return jsonify({'error': 'Guess text is required'}), 400
    if len(text) > guesses.MAX_GUESS_LENGTH:
        return jsonify({'error': f'Guess must be at most {guesses.MAX_GUESS_LENGTH} characters'}), 400
    result = guesses.submit_guess(get_store(), room_id, current_user.id, text)
    return jsonify(result.to_dict()), 201


@rooms.route('/<int:room_id>/strokes', methods=['GET'])
def list_strokes(room_id):
    return jsonify([s.stroke_data for s in get_store().list_strokes(room_id)])


@rooms.route('/<int:room_id>/strokes', methods=['POST'])
def save_stroke(room_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidStroke('Stroke must be an object')
    stroke = data.get('stroke', data)
    saved = drawing.save_drawing_stroke(get_store(), room_id, current_user.id, stroke)
    return jsonify({'saved': saved}), 202


@rooms.route('/<int:room_id>/strokes', methods=['DELETE'])
def clear_strokes(room_id):
    cleared = drawing.clear_drawing(get_store(), room_id, current_user.id)
    return jsonify({'cleared': cleared}), 202
