"""
Pytest configuration and fixtures
"""

import sys
from pathlib import Path
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Add repo root and src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from api.config import Config
from api.main import create_app
from record_catalog_core.catalog import CatalogOperations, CatalogStore, Record


@pytest.fixture
def store() -> CatalogStore:
    """Fresh store holding the three seed records"""
    return CatalogStore()


@pytest.fixture
def empty_store() -> CatalogStore:
    return CatalogStore(seed=())


@pytest.fixture
def catalog(store) -> CatalogOperations:
    return CatalogOperations(store)


@pytest.fixture
def test_config(monkeypatch) -> Config:
    """Config for tests: rate limiting off, quiet logs"""
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("APP_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")
    monkeypatch.setenv("CATALOG_SEED", "true")
    return Config()


@pytest.fixture
def app(test_config, store) -> FastAPI:
    return create_app(config=test_config, store=store)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Test client with lifespan events run"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_record_data():
    """Sample record payload for testing"""
    return {
        "id": "4",
        "title": "Levitating",
        "artist": "Dua Lipa",
        "price": 0.99,
    }


@pytest.fixture
def sample_record(sample_record_data) -> Record:
    return Record(**sample_record_data)


# Test markers
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (full application)"
    )
    config.addinivalue_line(
        "markers", "concurrency: Multi-threaded tests against the catalog store"
    )
