"""
Shared fixtures: in-memory SQLite databases and a TestClient wired to them.
"""

import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ROUTING_DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "debug")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="remotecc-logs-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from shared.database import Base, LookupBase, build_engine
from apps.call_routing import models
from apps.call_routing import routes
from apps.call_routing.event_store import remote_cc_store, notify_store
from apps.call_routing.notifier import RealtimeNotifier, get_notifier
from apps.call_routing.routing_table import RoutingTable
from main import app


@pytest.fixture
def event_session_factory():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def lookup_session_factory():
    engine = build_engine("sqlite://")
    LookupBase.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def broken_session_factory():
    """A database with no tables at all, so every query fails"""
    engine = build_engine("sqlite://")
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def seed_rules(lookup_session_factory):
    def _seed(*rows):
        db = lookup_session_factory()
        try:
            for state, area_codes, extension in rows:
                db.add(models.StateAreaCode(state=state, area_codes=area_codes, extension=extension))
            db.commit()
        finally:
            db.close()
    return _seed


@pytest.fixture
def routing_table(lookup_session_factory):
    return RoutingTable(lookup_session_factory)


@pytest.fixture
def events_store(event_session_factory):
    return remote_cc_store(event_session_factory)


@pytest.fixture
def calls_store(event_session_factory):
    return notify_store(event_session_factory)


@pytest.fixture
def notifier():
    return RealtimeNotifier()


@pytest.fixture
def client(routing_table, events_store, calls_store, notifier):
    app.dependency_overrides[routes.get_routing_table] = lambda: routing_table
    app.dependency_overrides[routes.get_remote_cc_store] = lambda: events_store
    app.dependency_overrides[routes.get_notify_store] = lambda: calls_store
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
