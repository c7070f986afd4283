from flask import current_app

STORE_KEY = 'charades.store'


def build_store(flask_app, feed=None):
    """Pick the backend named by STORE_BACKEND."""
    backend = flask_app.config.get('STORE_BACKEND', 'memory')
    if backend == 'sql':
        from charades.store.sql import SqlStore
        return SqlStore(feed)
    if backend != 'memory':
        raise ValueError(f"Unknown STORE_BACKEND: {backend}")
    from charades.store.memory import MemoryStore
    flask_app.logger.warning('No database configured, using the in-memory store')
    return MemoryStore(feed)


def get_store():
    return current_app.extensions[STORE_KEY]
