import os
import tempfile

# Point the app at a throwaway SQLite file before anything imports settings
_TEST_DB_DIR = tempfile.mkdtemp(prefix="student_registry_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DB_DIR, 'registry.db')}"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from student_registry.core.database import (
    SessionLocal,
    build_engine,
    create_database_tables,
    drop_database_tables,
    engine,
)
from student_registry.api.deps import get_db
from student_registry.main import app
from student_registry.models.student import Student


@pytest.fixture(autouse=True)
def tables():
    create_database_tables()
    yield
    drop_database_tables()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def add_students(db):
    def _add(*students):
        db.add_all([Student(name=name, age=age) for name, age in students])
        db.commit()
    return _add


@pytest.fixture
def unreachable_db(tmp_path):
    """Route get_db to a SQLite path whose directory does not exist."""
    broken_engine = build_engine(f"sqlite:///{tmp_path / 'missing' / 'registry.db'}")

    def _broken_get_db():
        session = SessionLocal(bind=broken_engine)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _broken_get_db
    yield broken_engine
    app.dependency_overrides.pop(get_db, None)
    broken_engine.dispose()


@pytest.fixture
def pool():
    return engine.pool


PSYCOPG2_REFUSED = (
    'connection to server at "127.0.0.1", port 1 failed: Connection refused\n'
    "\tIs the server running on that host and accepting TCP/IP connections?\n"
)


class RefusingSession:
    """Session stand-in whose connect fails with a multi-line driver message."""

    def __init__(self, driver_message=PSYCOPG2_REFUSED):
        self.driver_message = driver_message
        self.closed = False

    def connection(self):
        raise OperationalError(None, None, Exception(self.driver_message))

    def close(self):
        self.closed = True


@pytest.fixture
def refusing_session():
    return RefusingSession()


@pytest.fixture
def refused_db(refusing_session):
    """Route get_db to a session that fails the way psycopg2 does."""
    def _refused_get_db():
        try:
            yield refusing_session
        finally:
            refusing_session.close()

    app.dependency_overrides[get_db] = _refused_get_db
    yield refusing_session
    app.dependency_overrides.pop(get_db, None)
