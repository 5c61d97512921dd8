"""Fixtures shared by every test package: store, container, app and SDK."""
import asyncio
import os
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from dependency_injector import providers
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import SQLAlchemyError

from src.app.containers import Container
from src.app.main import create_app
from src.client import DimDimClient
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork


@pytest.fixture(scope="module")
def async_db_url(tmp_path_factory):
    """
    Async SQLAlchemy URL of the store the tests run against.

    A SQLite file through aiosqlite unless TEST_DATABASE_URL names another store,
    or TEST_DATABASE=postgres asks for a disposable PostgreSQL container.
    """
    explicit_url = os.environ.get("TEST_DATABASE_URL")
    if explicit_url:
        yield explicit_url
        return

    if os.environ.get("TEST_DATABASE", "sqlite").lower() == "postgres":
        from testcontainers.postgres import PostgresContainer

        with PostgresContainer("postgres:16-alpine") as postgres:
            # testcontainers hands out a psycopg2 URL, the app speaks asyncpg
            yield postgres.get_connection_url().replace("postgresql+psycopg2://", "postgresql+asyncpg://")
        return

    yield f"sqlite+aiosqlite:///{tmp_path_factory.mktemp('store') / 'dimdim_test.db'}"


@pytest.fixture(scope="module")
def test_settings_override(async_db_url):
    """Point Settings.database_url at the test store for the duration of a module."""
    from src.app.config import get_settings

    previous = os.environ.get("DATABASE_URL")
    os.environ["DATABASE_URL"] = async_db_url
    get_settings.cache_clear()

    yield

    if previous is None:
        os.environ.pop("DATABASE_URL", None)
    else:
        os.environ["DATABASE_URL"] = previous
    get_settings.cache_clear()


async def wait_for_store(db: Database, attempts: int = 20, delay: float = 0.2) -> None:
    """Poll until the store accepts connections; a fresh container can lag behind its port."""
    last_error = None
    for _ in range(attempts):
        try:
            async with db.session_maker() as session:
                await session.connection()
            return
        except (SQLAlchemyError, OSError) as e:
            last_error = e
            await asyncio.sleep(delay)
    raise RuntimeError(f"Store not reachable after {attempts} attempts") from last_error


@pytest_asyncio.fixture
async def db(async_db_url):
    database = Database(DatabaseSettings(db_url=async_db_url))
    await wait_for_store(database)
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def clean_database(db):
    """The test store with every table dropped and recreated."""
    import src.app.infrastructure.entities  # noqa: F401  registers tables on Base.metadata

    await db.drop_tables()
    await db.create_tables()
    yield db


@pytest.fixture
def test_container(test_settings_override, clean_database):
    """A fresh Container whose database provider is pinned to the clean test store."""
    container = Container()
    container.database.override(providers.Object(clean_database))
    yield container
    container.database.reset_override()
    container.unwire()


@asynccontextmanager
async def _no_startup(app: FastAPI):
    # clean_database already built the schema
    yield


@pytest_asyncio.fixture
async def test_app(test_container):
    """The real application factory, wired to the test container."""
    yield create_app(container=test_container, lifespan=_no_startup)


@pytest_asyncio.fixture
async def http_client(test_app):
    """Raw httpx client against the in-process app, for status-code level assertions."""
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def dimdim_client(test_app):
    """DimDimClient talking to the in-process app."""
    transport_client = AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test")
    async with DimDimClient(base_url="http://test", client=transport_client) as client:
        yield client
    await transport_client.aclose()


@pytest_asyncio.fixture
async def unit_of_work(clean_database, test_container):
    """A UnitOfWork on the clean store, mapping through the container's EntityMapper."""
    yield UnitOfWork(clean_database, test_container.entity_mapper())


# Repositories and services resolved from the test container

@pytest.fixture
def client_repository(test_container):
    return test_container.client_repository()


@pytest.fixture
def transaction_repository(test_container):
    return test_container.transaction_repository()


@pytest.fixture
def client_service(test_container):
    return test_container.client_service()


@pytest.fixture
def transaction_service(test_container):
    return test_container.transaction_service()
