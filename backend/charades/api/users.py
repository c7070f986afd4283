from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from charades.errors import CharadesError, UserNotFound
from charades.services import identity
from charades.services.identity import SessionUser
from charades.store import get_store

users = Blueprint('users', __name__)


@users.errorhandler(CharadesError)
def handle_game_error(exc):
    return jsonify(exc.to_dict()), exc.status_code


@users.route('/anonymous', methods=['POST'])
def create_anonymous():
    """
    Creates a throwaway identity with a generated name and logs it in.
    """
    user = identity.create_anonymous_user(get_store())
    login_user(SessionUser(user), remember=True)
    return jsonify({'success': True, 'user': user.to_dict()}), 201


@users.route('/signup', methods=['POST'])
def signup():
    data = request.get_json(silent=True) or {}
    username = (data.get('username') or '').strip()
    password = data.get('password')
    if not all([username, password]):
        return jsonify({'error': 'Username and password are required'}), 400
    user = identity.signup(get_store(), username, password, email=data.get('email'))
    login_user(SessionUser(user), remember=bool(data.get('remember_me')))
    return jsonify({'success': True, 'user': user.to_dict()}), 201


@users.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    user = identity.authenticate(get_store(), data.get('username'), data.get('password'))
    login_user(SessionUser(user), remember=bool(data.get('remember_me')))
    return jsonify({'success': True, 'user': user.to_dict()})


@users.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True})


@users.route('/me', methods=['GET'])
@login_required
def me():
    # Re-read so lifetime stats are current
    user = get_store().get_user(current_user.id)
    return jsonify({'success': True, 'user': user.to_dict()})


@users.route('/<int:user_id>', methods=['GET'])
def get_user(user_id):
    user = get_store().get_user(user_id)
    if not user:
        raise UserNotFound()
    return jsonify(user.to_dict())
