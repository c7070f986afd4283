import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Without a database URL the app falls back to the in-process memory store
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STORE_BACKEND = os.environ.get('STORE_BACKEND') or ('sql' if os.environ.get('DATABASE_URL') else 'memory')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
    CORS_ORIGINS = [o for o in os.environ.get('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000').split(',') if o]
    # Game rules
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '8'))
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '2'))
    ROUND_DURATION_SEC = int(os.environ.get('ROUND_DURATION_SEC', '600'))
    # Countdown tick interval (seconds) for active rooms
    TIMER_TICK_SEC = float(os.environ.get('TIMER_TICK_SEC', '1'))
