"""LMS backend - FastAPI Entry Point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from . import config
from .app_logger import get_logger
from .infrastructure.database import (
    apply_migrations, close_async_db, get_async_db, release_async_db
)
from .routes import rooms_router
from .routes.responses import error_response

logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: bring the schema up to date before accepting requests
    db = await get_async_db()
    try:
        applied = await apply_migrations(db, config.MIGRATIONS_DIR)
    finally:
        await release_async_db(db)
    logger.info("Database ready at %s (%d migration(s) applied)", config.DATABASE_PATH, len(applied))
    yield
    await close_async_db()


app = FastAPI(title="LMS", root_path=config.ROOT_PATH, lifespan=lifespan)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Errors raised outside a handler body (e.g. while opening the DB) keep the JSON error shape."""
    return error_response(exc)


app.include_router(rooms_router)
