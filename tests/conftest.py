"""
pytest configuration and fixtures.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from main import create_app
from tests.fakes import FakeDatabase, FakeProductRepository


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def repo() -> FakeProductRepository:
    return FakeProductRepository()


@pytest.fixture
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def client(
    settings: Settings,
    database: FakeDatabase,
    repo: FakeProductRepository,
) -> Generator[TestClient, None, None]:
    """App wired to in-memory fakes, with startup/shutdown run."""
    app = create_app(settings, database=database, repository=repo)
    with TestClient(app) as test_client:
        yield test_client
