from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from guidance.api import sessions, interactions, gemini
from guidance.config import Settings, get_settings
from guidance.database.connection import Database
from guidance.services.llm_service import GeminiService

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.database
    logger.info("Starting guidance backend: %r", settings)

    # one-shot (serverless) invocations assume the schema already exists;
    # a long-running process is useless without the store, so it fails startup
    if not settings.is_serverless:
        try:
            await database.ping()
            await database.create_all()
        except Exception:
            logger.critical("Database is not reachable at startup", exc_info=True)
            await database.dispose()
            raise

    yield

    await database.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="Guidance Session API",
        description="Session/interaction log and Gemini proxy for the student guidance app",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.llm_service = GeminiService(settings)

    # detail stays in the server log
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled %s on %s %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    prefix = settings.api_prefix.rstrip("/")
    app.include_router(sessions.router, prefix=f"{prefix}/sessions", tags=["sessions"])
    app.include_router(interactions.router, prefix=f"{prefix}/interactions", tags=["interactions"])
    app.include_router(gemini.router, prefix=f"{prefix}/gemini", tags=["gemini"])

    @app.get("/")
    async def root():
        return {"message": "Guidance Session API", "version": VERSION}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
