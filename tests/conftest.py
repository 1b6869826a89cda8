import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

import pytest
from fastapi.testclient import TestClient

from musicauth.app import create_app
from musicauth.auth import passwords
from musicauth.auth.session import SessionManager
from musicauth.core.models import User
from musicauth.infra.database import Base, init_db, make_engine
from musicauth.infra.memstore import MemoryStore
from musicauth.infra.sqlstore import SQLStore

SESSION_KEY = "test-session-key"


@pytest.fixture(autouse=True, scope="session")
def fast_hasher():
    # Keep argon2 cheap in tests; the parameters live in each hash anyway.
    passwords.configure(time_cost=1, memory_cost=1024, parallelism=1)
    yield
    passwords.configure()


def make_user(**overrides) -> User:
    fields = {"login": "user", "password": "password", "stage_name": "Stage Name"}
    fields.update(overrides)
    return User(**fields)


def drop_tables(sql_store) -> None:
    """Remove the schema under a live store so every query fails."""
    with sql_store.session() as db:
        Base.metadata.drop_all(bind=db.get_bind())


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def sql_store() -> SQLStore:
    engine = make_engine("sqlite://")
    init_db(engine)
    yield SQLStore(engine)
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request, memory_store, sql_store):
    return memory_store if request.param == "memory" else sql_store


@pytest.fixture()
def sessions() -> SessionManager:
    return SessionManager(SESSION_KEY)


@pytest.fixture()
def client(memory_store, sessions) -> TestClient:
    app = create_app(memory_store, sessions, cors_origin="http://localhost")
    # https so the Secure session cookie is sent back.
    return TestClient(app, base_url="https://testserver")


@pytest.fixture()
def client_for(sessions):
    def _make(store, **kwargs) -> TestClient:
        app = create_app(store, sessions, cors_origin="http://localhost")
        return TestClient(app, base_url="https://testserver", **kwargs)

    return _make
