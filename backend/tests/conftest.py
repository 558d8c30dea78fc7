import os
import sys
import pytest

# Ensure the backend root (containing the `bingo` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from bingo import create_app, socketio
from bingo.models import Session
from bingo.services import BingoServices
from bingo.services.broadcast import Broadcaster


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    DEFAULT_CARD_SIZE = 24
    CORS_ORIGINS = ['*']
    SOCKETIO_NAMESPACE = '/'
    ROOM_TTL_SEC = 0
    LOG_LEVEL = 'DEBUG'


class RecordingBroadcaster(Broadcaster):
    """Keeps every event instead of sending it."""

    def __init__(self):
        self.room_events = []        # (event, payload, room_id)
        self.connection_events = []  # (event, payload, sid)

    def to_room(self, event, payload, room_id):
        self.room_events.append((event, payload, room_id))

    def to_connection(self, event, payload, sid):
        self.connection_events.append((event, payload, sid))

    def room_event_names(self):
        return [name for name, _, _ in self.room_events]


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def services(broadcaster):
    return BingoServices(broadcaster)


@pytest.fixture()
def host_session():
    def _make(room_id, sid='host-sid'):
        return Session(sid, 'host-token', room_id, is_host=True)
    return _make


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
    )
    yield test_client
    try:
        test_client.disconnect()
    except Exception:
        pass


@pytest.fixture()
def make_sio_client(flask_app):
    clients = []

    def _make():
        c = socketio.test_client(flask_app)
        clients.append(c)
        return c

    yield _make
    for c in clients:
        try:
            c.disconnect()
        except Exception:
            pass
