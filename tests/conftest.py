import os
import sys
import pytest

# Ensure the project root (containing the `bingo` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from bingo import create_app, socketio

NAMESPACE = '/ws'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ALLOWED_ORIGINS = ['http://localhost:5173']
    SOCKETIO_NAMESPACE = NAMESPACE
    DEFAULT_ROOM = 'default'
    TICKET_MAX_ATTEMPTS = 10
    TICKET_SEARCH_MAX_STEPS = 200000
    LOG_LEVEL = 'DEBUG'


class RecordingEmitter:
    """Stands in for ``socketio.emit``; keeps every call in order."""

    def __init__(self):
        self.calls = []

    def __call__(self, event, payload, to=None):
        self.calls.append((event, payload, to))

    def names(self):
        return [c[0] for c in self.calls]

    def of(self, event):
        return [c for c in self.calls if c[0] == event]

    def clear(self):
        self.calls.clear()


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def hub(flask_app):
    return flask_app.extensions['bingo_hub']


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace=NAMESPACE,
        )
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected(NAMESPACE):
                test_client.disconnect(namespace=NAMESPACE)
        except Exception:
            pass


@pytest.fixture()
def sio_client(make_sio_client):
    return make_sio_client()


@pytest.fixture()
def emitter():
    return RecordingEmitter()
