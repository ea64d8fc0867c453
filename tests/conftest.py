"""Shared pytest fixtures."""

from collections.abc import AsyncIterator, Iterator
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from community.app import App
from community.config import Config
from community.core.core import Core
from community.core.modules.session.service import SessionService
from community.web.server import create_fastapi_app
from tests.fakes import FakeCollection, FakeMongo


class FrozenClock:
    """Replacement for `now()` that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def config():
    return Config(_env_file=None, database_url="mongodb://127.0.0.1:27017/community_test", session_timeout_days=7)


@pytest.fixture
def mongo():
    return FakeMongo()


@pytest.fixture
async def core(config, mongo) -> AsyncIterator[Core]:
    """Core with started services, the sweeper is left stopped."""
    core = Core(config, mongo)
    await core.ensure_services_started()
    yield core
    await core.services.stop_all()


@pytest.fixture
def session_service(core) -> SessionService:
    return core.services.session


@pytest.fixture
def sessions(mongo) -> FakeCollection:
    return mongo.database.get_collection("sessions")


@pytest.fixture
def users(mongo) -> FakeCollection:
    return mongo.database.get_collection("users")


@pytest.fixture
def clock(monkeypatch) -> FrozenClock:
    """Freeze the clock used by the session service."""
    frozen = FrozenClock(datetime(2025, 3, 1, 12, 0, 0, tzinfo=UTC))
    monkeypatch.setattr("community.core.modules.session.service.now", frozen)
    return frozen


@pytest.fixture
def client(config, mongo) -> Iterator[TestClient]:
    """HTTP client running the full application lifespan over the fake database."""
    fastapi_app = create_fastapi_app(App(config, mongo), config)
    with TestClient(fastapi_app) as test_client:
        yield test_client
