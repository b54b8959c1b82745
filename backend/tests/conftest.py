from __future__ import annotations

import os
import tempfile
from typing import Any, Dict, Generator

import pytest

# point the app at a throwaway sqlite file before anything imports fintrack
_fd, _DB_PATH = tempfile.mkstemp(prefix="fintrack_test_", suffix=".sqlite3")
os.close(_fd)
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ.setdefault("SECRET_KEY", "test-secret")

from fintrack.db.base import Base  # noqa: E402
from fintrack.db.session import SessionLocal, engine, get_db, init_db  # noqa: E402
from fintrack.main import app  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _schema() -> Generator[None, Any, Any]:
    init_db()
    yield
    engine.dispose()
    try:
        os.remove(_DB_PATH)
    except OSError:
        pass


@pytest.fixture(scope="function")
def db_session() -> Generator[Any, Any, Any]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        with engine.begin() as conn:
            for tbl in reversed(Base.metadata.sorted_tables):
                conn.execute(tbl.delete())


@pytest.fixture(autouse=True)
def override_dependency(db_session):
    def _get_db_override():
        yield db_session

    app.dependency_overrides[get_db] = _get_db_override
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client(db_session):
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c


def register(client, username: str = "alice", email: str = "alice@finmail.com", password: str = "secret123") -> Dict[str, Any]:
    r = client.post("/api/v1/auth/register", json={"username": username, "email": email, "password": password})
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture()
def auth(client) -> Dict[str, Any]:
    """Registered user: {'user': {...}, 'headers': {...}}."""
    body = register(client)
    return {"user": body["user"], "headers": {"Authorization": f"Bearer {body['token']}"}}


@pytest.fixture()
def other_auth(client) -> Dict[str, Any]:
    body = register(client, username="bob", email="bob@finmail.com")
    return {"user": body["user"], "headers": {"Authorization": f"Bearer {body['token']}"}}
