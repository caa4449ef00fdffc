"""PyTrivia - FastAPI app entry point."""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from app.core.config import get_settings
from app.core.errors import setup_error_handlers
from app.core.logging import setup_logging
from app.db.base import create_tables
from app.db.session import close_db, get_session_factory, init_db
from app.routers import api, auth, users
from app.services.seeding import seed_questions

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    await init_db(settings.database_url)
    await create_tables()

    async with get_session_factory()() as db:
        await seed_questions(db, settings.question_bank_path)

    logger.info("app_started", app_name=settings.app_name)
    yield
    await close_db()


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Python trivia: accounts, progress and ranked mode",
        debug=settings.debug,
        lifespan=lifespan,
    )
    setup_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(api.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
