import fakeredis
import pytest
from fastapi.testclient import TestClient

from linktrack.api.deps import get_store
from linktrack.db.store import RedisStore
from linktrack.main import app
from linktrack.services.links import LinkRegistry
from linktrack.services.visits import VisitRecorder


BASE_URL = "http://sho.rt"


@pytest.fixture
def redis_server():
    """In-memory Redis; set .connected = False to simulate an outage."""
    return fakeredis.FakeServer()


@pytest.fixture
def store(redis_server):
    """Creates a fresh store for each test."""
    client = fakeredis.FakeRedis(server=redis_server, decode_responses=True)
    yield RedisStore(client)
    redis_server.connected = True
    client.flushall()


@pytest.fixture
def registry(store):
    return LinkRegistry(store, BASE_URL)


@pytest.fixture
def recorder(registry):
    return VisitRecorder(registry)


@pytest.fixture
def client(store):
    """Creates a test client with the store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_urls():
    return [
        "https://example.com/test1",
        "https://google.com/search?q=test",
        "http://github.com/user/repo",
    ]
