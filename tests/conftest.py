# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select

from app import create_app
from database import create_pool
from models import logs, temperature


@pytest.fixture(scope="function")
def db_url(tmp_path):
    """Arquivo SQLite novo por teste."""
    return f"sqlite:///{tmp_path / 'temperature.db'}"


@pytest.fixture(scope="function")
def pool(db_url):
    engine = create_pool(db_url, size=5, timeout=5)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def app(pool):
    return create_app(pool)


@pytest.fixture(scope="function")
def client(app):
    """Cliente de teste; o `with` dispara a criação das tabelas."""
    with TestClient(app) as test_client:
        yield test_client


def fetch_rows(pool, table):
    with pool.connect() as conn:
        return [row._asdict() for row in conn.execute(select(table))]


@pytest.fixture
def reading_rows(pool):
    return lambda: fetch_rows(pool, temperature)


@pytest.fixture
def log_rows(pool):
    return lambda: fetch_rows(pool, logs)
