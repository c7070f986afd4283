import logging
import random

from flask_login import UserMixin

from charades import bcrypt
from charades.errors import InvalidCredentials, UsernameTaken

logger = logging.getLogger(__name__)

ADJECTIVES = ('Cool', 'Fast', 'Smart', 'Brave', 'Happy', 'Lucky', 'Swift', 'Bright', 'Bold', 'Quick')
NOUNS = ('Artist', 'Player', 'Gamer', 'Drawer', 'Painter', 'Creator', 'Master', 'Hero', 'Star', 'Ace')
USERNAME_ATTEMPTS = 5


class SessionUser(UserMixin):
    """Flask-Login wrapper around a stored user."""

    def __init__(self, record):
        self.record = record
        self.id = record.id
        self.username = record.username

    def to_dict(self):
        return self.record.to_dict()


def generate_random_username(rng=random) -> str:
    return f"{rng.choice(ADJECTIVES)}{rng.choice(NOUNS)}{rng.randint(1, 999)}"


def create_anonymous_user(store, rng=random):
    username = generate_random_username(rng)
    for _ in range(USERNAME_ATTEMPTS):
        if not store.get_user_by_username(username):
            break
        username = generate_random_username(rng)
    user = store.create_user(username)
    logger.info(f"[user-anon] user={user.id} username={user.username}")
    return user


def signup(store, username, password, email=None):
    if store.get_user_by_username(username):
        raise UsernameTaken()
    password_hash = bcrypt.generate_password_hash(password).decode('utf-8')
    user = store.create_user(username, email=email, password_hash=password_hash)
    logger.info(f"[user-signup] user={user.id} username={user.username}")
    return user


def authenticate(store, username, password):
    user = store.get_user_by_username(username)
    if not user or user.is_anonymous_account or not password or not bcrypt.check_password_hash(user.password_hash, password):
        raise InvalidCredentials()
    return user
