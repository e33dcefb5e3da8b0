"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from moneydesk.api.main import create_app
from moneydesk.config import Settings
from moneydesk.domain.repository import InstrumentStore
from moneydesk.infrastructure.database.models import Base
from moneydesk.infrastructure.memory import build_memory_store

# Fixed "today" so status and countdown assertions are deterministic
TODAY = date(2024, 3, 20)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock():
    return lambda: TODAY


@pytest.fixture
def memory_store() -> InstrumentStore:
    """Fresh in-memory store standing in for the remote service"""
    return build_memory_store()


@pytest.fixture
def db(tmp_path) -> Generator[Session, None, None]:
    """Create test database and session"""
    engine = create_engine(f"sqlite:///{tmp_path}/test.db", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(tmp_path) -> TestClient:
    """Create FastAPI test client backed by a throwaway SQLite database"""
    settings = Settings(store_backend="sql", database_url=f"sqlite:///{tmp_path}/api.db")
    app = create_app(settings)
    return TestClient(app, headers={"X-User-ID": "user_a"})
