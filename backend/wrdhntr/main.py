from flask import Blueprint, jsonify
from wrdhntr import get_registry

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the WrdHntr game server!'})

@main.route('/health')
def health():
    stats = get_registry().stats()
    return jsonify({'status': 'ok', **stats})
