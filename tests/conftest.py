"""Fixtures compartilhadas: banco SQLite em memória e TestClient"""
import os
import tempfile
from pathlib import Path

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "simpleval-tests.log"))
os.environ["OPENAI_API_KEY"] = ""
os.environ["DEEPSEEK_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from simpleval.core.database import build_engine, get_db, init_db
from simpleval.main import app

from helpers import make_team


@pytest.fixture
def engine():
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sentinels(db_session):
    return make_team(db_session, "Sentinels", "SEN")


@pytest.fixture
def hundred_thieves(db_session):
    return make_team(db_session, "100 Thieves", "100T")
