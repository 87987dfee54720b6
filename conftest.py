"""
Root conftest for the pytest test suite.

Each test runs against a fresh, isolated in-memory SQLite database that is
initialized manually with Tortoise, which is the most reliable method for an
async pytest environment.

Key Fixtures:
- `anyio_backend`: Specifies the asyncio backend.
- `initialize_test_db`: (autouse) Creates a fresh DB schema for each test.
- `app_for_testing`: The FastAPI application with its production lifespan
  disabled so `initialize_test_db` owns the database connection.
- `async_client`: An httpx AsyncClient bound to the application.
- `report_factory`: Creates Report rows directly in the database.
- `sample_reports`: Three persisted reports.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from reports_api.core.config import MODEL_MODULES
from reports_api.features.reports.models import Report

# Import the app
from reports_api.main import app as actual_app

TEST_APPLICATION_NAME = "reportsApp"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """
    Specifies the asyncio backend for async tests.
    """
    return "asyncio"


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db() -> AsyncGenerator[None, None]:
    """
    Initializes the database for each test function.

    This async, autouse fixture creates a fresh in-memory database and schema
    for each test and tears it down afterwards.
    """
    test_db_config = {
        "connections": {"default": "sqlite://:memory:"},
        "apps": {
            "models": {
                "models": MODEL_MODULES,
                "default_connection": "default",
            }
        },
    }
    await Tortoise.init(config=test_db_config)
    await Tortoise.generate_schemas()

    yield

    await Tortoise.close_connections()


@pytest.fixture(scope="function")
def app_for_testing() -> Generator[FastAPI, Any, None]:
    """
    Provides the FastAPI application instance for testing, with its
    production lifespan manager disabled and a known application name.
    """
    original_lifespan = actual_app.router.lifespan_context
    original_name = actual_app.state.application_name

    @asynccontextmanager
    async def dummy_lifespan(app: FastAPI):
        yield

    actual_app.router.lifespan_context = dummy_lifespan
    actual_app.state.application_name = TEST_APPLICATION_NAME

    yield actual_app

    # Restore the original state after the test
    actual_app.router.lifespan_context = original_lifespan
    actual_app.state.application_name = original_name


@pytest_asyncio.fixture(scope="function")
async def async_client(app_for_testing: FastAPI) -> AsyncGenerator[AsyncClient, Any]:
    """
    Provides an httpx AsyncClient that calls the application in-process.
    """
    transport = ASGITransport(app=app_for_testing)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture
async def report_factory():
    """A factory to create reports directly in the database."""

    async def _factory(name: str, **fields) -> Report:
        return await Report.create(name=name, **fields)

    return _factory


@pytest_asyncio.fixture
async def sample_reports(report_factory) -> list[Report]:
    """Three persisted reports with ids 1, 2 and 3."""
    return [
        await report_factory("Quarterly summary", logo_content_type="image/png", logo="aGVsbG8="),
        await report_factory("Annual review"),
        await report_factory("Incident log", created_time=1_700_000_000_000),
    ]
