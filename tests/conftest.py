"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from enriquecer.api.main import create_app
from enriquecer.infrastructure.database.models import Base
from enriquecer.infrastructure.database.session import get_db
from enriquecer.infrastructure.database.repositories import CategoryStore, KeyValueRepository, RecordStore
from enriquecer.domain.models import Expense, Income


# Test database: one shared in-memory SQLite connection
TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def kv(db: Session) -> KeyValueRepository:
    return KeyValueRepository(db)


@pytest.fixture
def store(kv: KeyValueRepository) -> RecordStore:
    return RecordStore(kv)


@pytest.fixture
def category_store(kv: KeyValueRepository) -> CategoryStore:
    return CategoryStore(kv)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_transactions() -> list:
    """Three months of salary and spending, newest first"""
    return [
        Expense(id="e3", date="2024-03-02", description="Mercado", amount=420.5, category="Essenciais"),
        Income(id="i3", date="2024-03-01", description="Salário março", amount=5000.0, category="Salário"),
        Expense(id="e2", date="2024-02-14", description="Cinema", amount=60.0, category="Supérfluos"),
        Expense(id="e1b", date="2024-01-20", description="Reserva", amount=800.0, category="Objetivos"),
        Expense(id="e1", date="2024-01-10", description="Aluguel", amount=1500.0, category="Essenciais"),
        Income(id="i1", date="2024-01-05", description="Salário janeiro", amount=5000.0, category="Salário"),
    ]
