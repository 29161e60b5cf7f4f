import os

# Settings are read at import time; keep tests off Postgres and NiceGUI.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UI_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from prompt_library import models  # noqa: F401
from prompt_library.core.database import Base, get_session
from prompt_library.main import create_app

# Provides the NiceGUI `user` fixture for the page tests.
pytest_plugins = ["nicegui.testing.user_plugin"]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(session_factory):
    app = create_app(with_ui=False)

    def _override_session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = _override_session
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
