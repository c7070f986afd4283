import random
import re

import pytest

from charades.errors import InvalidCredentials, UsernameTaken
from charades.services import identity

USERNAME_PATTERN = re.compile(
    r'^(Cool|Fast|Smart|Brave|Happy|Lucky|Swift|Bright|Bold|Quick)'
    r'(Artist|Player|Gamer|Drawer|Painter|Creator|Master|Hero|Star|Ace)'
    r'([1-9]\d{0,2})$'
)


def test_generated_usernames_follow_pattern():
    rng = random.Random(11)
    for _ in range(200):
        name = identity.generate_random_username(rng)
        match = USERNAME_PATTERN.match(name)
        assert match, name
        assert 1 <= int(match.group(3)) <= 999


def test_anonymous_user_starts_with_empty_stats(store):
    user = identity.create_anonymous_user(store)
    assert USERNAME_PATTERN.match(user.username)
    assert user.games_played == 0
    assert user.total_score == 0
    assert user.is_anonymous_account


def test_anonymous_user_retries_taken_names(store):
    taken = identity.generate_random_username(random.Random(5))
    store.create_user(taken)
    user = identity.create_anonymous_user(store, rng=random.Random(5))
    assert user.username != taken


def test_signup_and_authenticate(store):
    user = identity.signup(store, 'alice', 'password123', email='alice@example.com')
    assert user.email == 'alice@example.com'
    assert user.password_hash != 'password123'
    assert identity.authenticate(store, 'alice', 'password123').id == user.id

    with pytest.raises(InvalidCredentials):
        identity.authenticate(store, 'alice', 'wrong')
    with pytest.raises(InvalidCredentials):
        identity.authenticate(store, 'nobody', 'password123')
    with pytest.raises(UsernameTaken):
        identity.signup(store, 'alice', 'other')


def test_anonymous_accounts_cannot_password_login(store):
    user = identity.create_anonymous_user(store)
    with pytest.raises(InvalidCredentials):
        identity.authenticate(store, user.username, '')
