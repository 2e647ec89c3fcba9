# tests/conftest.py
import json
import os
import tempfile

# Keep the app's own engine off the real DB file and skip demo seeding.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["SEED_DEMO_VALUES"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from app.main import app
from app.db import Base, get_db
from app.models import WebknotValue
from client.api import ValuesClient


# --- Temporary SQLite DB file for the whole test session ---
@pytest.fixture(scope="session")
def tmp_db_url():
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    url = f"sqlite:///{path}"
    yield url
    try:
        os.remove(path)
    except OSError:
        pass


@pytest.fixture(scope="session")
def engine(tmp_db_url):
    eng = create_engine(tmp_db_url, connect_args={"check_same_thread": False}, future=True)
    Base.metadata.create_all(bind=eng)
    return eng


@pytest.fixture(scope="function")
def db_session(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    db = TestingSession()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


# --- Override FastAPI's DB dependency to use our test session ---
@pytest.fixture(autouse=True)
def override_get_db(db_session):
    def _get_db():
        try:
            yield db_session
        finally:
            pass
    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def values_client(client):
    """ValuesClient talking to the dev backend through the TestClient."""
    return ValuesClient(base_url="http://testserver", session=client, auth_header=lambda: None)


def _clear_all(db):
    db.execute(text("DELETE FROM webknot_values"))
    db.commit()


@pytest.fixture
def seed_values(db_session):
    """
    Seeds three values; ids are assigned 1..3 in this order.
    "Dormant" is inactive so activeOnly filtering has something to drop.
    """
    _clear_all(db_session)
    db_session.add_all([
        WebknotValue(title="Own The Outcome", pillar="Ownership", description="Results, not tasks."),
        WebknotValue(title="Integrity", pillar="Ownership", description="Do the right thing."),
        WebknotValue(title="Dormant", pillar="Archive", description="Old value.", active=False),
    ])
    db_session.commit()


@pytest.fixture
def empty_values(db_session):
    _clear_all(db_session)


# --- Fake HTTP session for ValuesClient unit tests ---
class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.text = text

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Records every request and replays queued responses (or raises queued exceptions)."""
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.cookies = {}

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append({
            "method": method, "url": url, "params": params,
            "json": json, "headers": headers or {}, "timeout": timeout,
        })
        nxt = self.responses.pop(0) if self.responses else FakeResponse(200, [])
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


@pytest.fixture
def make_client():
    def _make(*responses, token=None):
        session = FakeSession(*responses)
        api = ValuesClient(
            base_url="http://api.test/",
            session=session,
            auth_header=lambda: (f"Bearer {token}" if token else None),
            timeout=5,
        )
        return api, session
    return _make
