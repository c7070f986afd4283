from flask import Blueprint, jsonify

from charades.store import get_store

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Dumb Charades game server!'})

@main.route('/health')
def health_check():
    store = get_store()
    return jsonify({'status': 'healthy', 'store': store.name, 'subscribers': store.feed.subscriber_count()})
