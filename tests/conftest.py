# tests/conftest.py
import os
from datetime import date

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_SCHEMA"] = "1"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient

from api_main import create_app
from habitgrid.config import Settings
from habitgrid.crud import create_habit
from habitgrid.db import build_engine, build_session_factory, create_schema
from habitgrid.ledger import Ledger


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = build_engine("sqlite://")
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def ledger(engine):
    return Ledger(build_session_factory(engine))


@pytest.fixture
def db(ledger):
    with ledger.session() as session:
        yield session


@pytest.fixture
def habit(db):
    return create_habit(db, {"name": "Drink water", "icon": "💧"})


@pytest.fixture
def client(engine):
    app = create_app(Settings(), engine=engine)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def march_2025():
    return date(2025, 3, 15)
