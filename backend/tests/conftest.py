import os
import sys
import pytest

# Ensure the backend root (containing the `wrdhntr` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from wrdhntr import REGISTRY_KEY, create_app, socketio
from wrdhntr.services.games.dictionary import Dictionary
from wrdhntr.services.games.registry import SessionRegistry


# 15 letters; of TEST_WORDS only ÖL, ZEBRA and AAA cannot be spelled from them
FIXED_LETTERS = ['K', 'A', 'T', 'T', 'H', 'U', 'N', 'D', 'E', 'S', 'O', 'R', 'L', 'M', 'Å']

TEST_WORDS = [
    'KATT', 'HUND', 'TESTORD', 'HUNDAR', 'ORD', 'STOL', 'MÅL', 'SOL', 'KATTER',
    'ÖL', 'ZEBRA', 'AAA', 'SÅ', 'ÅLAND',
]


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:5173']
    WORDLIST_URL = None
    WORDLIST_PATH = None
    DEFAULT_MODE = 'freeforall'
    DEFAULT_LETTER_COUNT = 15
    DEFAULT_MIN_WORD_LENGTH = 3
    DEFAULT_GAME_DURATION_SEC = 60
    MAX_PLAYERS_PER_ROOM = 20
    SESSION_MAX_AGE_SEC = 1800
    SWEEP_INTERVAL_SEC = 300
    ENABLE_BACKGROUND_TASKS_IN_TESTS = False


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def fixed_letters(monkeypatch):
    def _letters(count=14, rng=None):
        return list(FIXED_LETTERS[:count])
    monkeypatch.setattr('wrdhntr.services.games.session.generate_letters', _letters)
    return FIXED_LETTERS


@pytest.fixture()
def dictionary():
    return Dictionary(TEST_WORDS)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def registry(dictionary, clock, fixed_letters):
    return SessionRegistry(dictionary, clock=clock)


@pytest.fixture()
def flask_app(dictionary, fixed_letters):
    application = create_app(TestConfig, dictionary=dictionary)
    with application.app_context():
        yield application


@pytest.fixture()
def app_registry(flask_app):
    return flask_app.extensions[REGISTRY_KEY]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


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
def make_sio_client(flask_app):
    """Factory for extra Socket.IO clients, all disconnected on teardown."""
    clients = []

    def _make():
        c = socketio.test_client(flask_app, namespace='/ws')
        clients.append(c)
        return c

    yield _make
    for c in clients:
        try:
            if c.is_connected('/ws'):
                c.disconnect(namespace='/ws')
        except Exception:
            pass
