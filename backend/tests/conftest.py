import os
import sys
import pytest

# Ensure the backend root (containing the `charades` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from charades import create_app, db, socketio
from charades.store import STORE_KEY


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    STORE_BACKEND = 'sql'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = 'INFO'
    CORS_ORIGINS = ['http://localhost:3000']
    MAX_PLAYERS = 8
    MIN_PLAYERS = 2
    ROUND_DURATION_SEC = 600


class MemoryTestConfig(TestConfig):
    STORE_BACKEND = 'memory'
    SQLALCHEMY_DATABASE_URI = None


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import charades.models  # noqa: F401
        db.create_all()
    # No context stays pushed: each test-client request gets its own g
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def memory_app():
    return create_app(MemoryTestConfig)


@pytest.fixture(params=['memory', 'sql'])
def store(request):
    """Run the test against both storage backends, inside an app context."""
    app_fixture = 'memory_app' if request.param == 'memory' else 'flask_app'
    application = request.getfixturevalue(app_fixture)
    with application.app_context():
        yield application.extensions[STORE_KEY]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_player(flask_app):
    """Return a logged-in test client and its anonymous user."""
    def _make():
        test_client = flask_app.test_client()
        res = test_client.post('/api/users/anonymous')
        assert res.status_code == 201
        return test_client, res.get_json()['user']
    return _make


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def users(store):
    """Three stored users: ann, ben and cat."""
    return [store.create_user(name) for name in ('ann', 'ben', 'cat')]
