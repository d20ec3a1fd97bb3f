import os
import sys
import pytest

# Ensure the backend root (containing the `typerace` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from typerace import create_app, socketio, registry
from typerace.services.race import RoomRegistry
from typerace.services.race.texts import TextSource

RACE_TEXT = 'the quick brown fox'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = '*'
    LOG_LEVEL = 'DEBUG'
    ROOM_CAPACITY = 2
    START_THRESHOLD = 2
    ROOM_ID_LENGTH = 6
    TYPING_CLOCK_TRIGGER = 'first_input'
    REGENERATE_TEXT_ON_RESTART = True
    RACE_TEXTS = [RACE_TEXT]
    RACE_TEXTS_PATH = None


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application
    registry.reset()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    """Factory for Socket.IO test clients on /ws; all are disconnected on teardown."""
    created = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/ws'
        )
        # Flush the connect greeting
        test_client.get_received('/ws')
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected('/ws'):
                test_client.disconnect(namespace='/ws')
        except Exception:
            pass


@pytest.fixture()
def sio_client(make_sio_client):
    return make_sio_client()


@pytest.fixture()
def race_registry():
    """A standalone registry, independent of any Flask app."""
    return RoomRegistry(capacity=2, start_threshold=2, text_source=TextSource([RACE_TEXT]))
