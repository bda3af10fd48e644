"""Shared fixtures: in-memory database, simulated Pearch API, authenticated client."""

from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from merraine.api.app import app
from merraine.api.deps import get_pearch_client
from merraine.api.limiter import limiter
from merraine.api.routes.credits import get_balance_client
from merraine.clients.pearch import PearchClient
from merraine.config import settings
from merraine.db import get_db, get_optional_db
from merraine.db.base import Base
from merraine.search.cache import search_cache


class FakePearch:
    """Queue-driven stand-in for the Pearch HTTP API."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response | Callable[[httpx.Request], httpx.Response]] = []
        self.sleeps: list[float] = []

    def queue(self, status_code: int = 200, json=None) -> None:
        self.responses.append(httpx.Response(status_code, json=json if json is not None else {}))

    def queue_timeout(self) -> None:
        def raise_timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        self.responses.append(raise_timeout)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        assert self.responses, f"Unexpected Pearch call: {request.method} {request.url}"
        item = self.responses.pop(0)
        if callable(item):
            return item(request)
        return item

    def client(self) -> PearchClient:
        return PearchClient(
            api_key="test-key",
            base_url="https://pearch.test",
            timeout=5.0,
            retry_delays=(1.0, 3.0),
            transport=httpx.MockTransport(self.handle),
            sleep=self.sleeps.append,
        )


def make_result(docid: str, score: float | None = None, **profile) -> dict:
    """A vendor search result entry with the profile nested inside."""
    result = {"docid": docid, "profile": {"docid": docid, "first_name": docid.title(), **profile}}
    if score is not None:
        result["score"] = score
    return result


@pytest.fixture(autouse=True)
def _reset_state(monkeypatch):
    monkeypatch.setattr(settings, "database_url", "")
    monkeypatch.setattr(settings, "pearch_api_key", "")
    limiter.reset()
    search_cache.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def vendor() -> FakePearch:
    return FakePearch()


@pytest.fixture
def client(session_factory, vendor):
    """Authenticated API client wired to the in-memory DB and the fake vendor."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_optional_db] = override_get_db
    app.dependency_overrides[get_pearch_client] = vendor.client
    app.dependency_overrides[get_balance_client] = vendor.client

    with TestClient(app) as test_client:
        test_client.cookies.set("merraine-auth", "authenticated")
        yield test_client


@pytest.fixture
def anonymous_client(session_factory, vendor):
    """API client without the auth cookie."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_optional_db] = override_get_db
    app.dependency_overrides[get_pearch_client] = vendor.client

    with TestClient(app) as test_client:
        yield test_client
