import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

DEMO_USERS = (
    ('alice', 'alice@example.com'),
    ('bob', 'bob@example.com'),
)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    logging.basicConfig(level=flask_app.config.get('LOG_LEVEL', 'INFO'))

    origins = flask_app.config.get('CORS_ORIGINS') or []
    if flask_app.config.get('STORE_BACKEND') == 'sql':
        db.init_app(flask_app)
        migrate.init_app(flask_app, db)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    CORS(flask_app, supports_credentials=True, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    from charades.store import STORE_KEY, build_store
    store = build_store(flask_app)
    flask_app.extensions[STORE_KEY] = store

    from charades.main import main
    flask_app.register_blueprint(main)

    from charades.api.users import users
    flask_app.register_blueprint(users, url_prefix='/api/users')

    from charades.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    from charades.socketio_events import register_change_relay, register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))
    register_change_relay(store.feed)

    from charades.services.identity import SessionUser

    @login_manager.user_loader
    def load_user(user_id):
        record = store.get_user(int(user_id))
        return SessionUser(record) if record else None

    @login_manager.unauthorized_handler
    def unauthorized():
        return {'error': 'Login required'}, 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from charades.services.identity import signup
        if flask_app.config.get('STORE_BACKEND') != 'sql':
            raise click.ClickException('db-reset needs STORE_BACKEND=sql')
        with flask_app.app_context():
            import charades.models  # noqa: F401
            db.drop_all()
            db.create_all()

            for username, email in DEMO_USERS:
                signup(store, username, 'password123', email=email)

            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
