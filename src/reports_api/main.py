import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from tortoise import Tortoise

from .common.errors import register_exception_handlers
from .core.config import APPLICATION_NAME, TORTOISE_ORM_CONFIG
from .core.logging_config import configure_logging
from .features.download.router import router as download_router
from .features.reports.router import router as reports_router

configure_logging()
logger = logging.getLogger("reports_api.main")  # This logger will inherit from 'reports_api'


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown events, such as connecting to the database.
    """
    logger.info(f"Starting {APPLICATION_NAME}...")
    await Tortoise.init(config=TORTOISE_ORM_CONFIG)
    await Tortoise.generate_schemas(safe=True)
    logger.info("Tortoise-ORM has been initialized.")

    yield

    await Tortoise.close_connections()
    logger.info("Tortoise-ORM connections have been closed.")


app = FastAPI(
    title="Reports API",
    description="API for managing reports and exporting them as JSON.",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.application_name = APPLICATION_NAME
register_exception_handlers(app)


@app.get("/")
async def read_root(request: Request):
    """
    Root endpoint for the API.
    """
    client_host = request.client.host if request.client else "unknown client"
    logger.info(f"Root endpoint '/' accessed by {client_host}")
    return {"message": f"Welcome to the {APPLICATION_NAME} API!"}


app.include_router(reports_router, prefix="/api")
# The export lives beside /api, not under it
app.include_router(download_router)
