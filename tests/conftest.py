import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from speedboard.app import create_app
from speedboard.cache import LocalCache, MemoryBacking
from speedboard.services import Ranker, Reconciler
from speedboard.store import SQLStore
from tests.fakes import FakeStore


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def backing():
    return MemoryBacking()


@pytest.fixture
def cache(backing):
    return LocalCache(backing, game_modes=(15, 30, 60))


@pytest.fixture
def reconciler(store, cache):
    return Reconciler(store, cache)


@pytest.fixture
def ranker(store):
    return Ranker(store, fetch_cap=1000)


@pytest.fixture
def sql_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_store(sql_engine):
    store = SQLStore(sql_engine, read_timeout=5.0)
    yield store
    store.close()


@pytest.fixture
def client(sql_store, cache):
    """API client over an in-memory SQLite database."""

    with TestClient(create_app(store=sql_store, cache=cache)) as test_client:
        yield test_client
