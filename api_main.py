import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from habitgrid.api import router
from habitgrid.config import Settings, settings as default_settings
from habitgrid.db import build_engine, build_session_factory, create_schema, ping
from habitgrid.errors import HabitTrackerError
from habitgrid.ledger import Ledger
from habitgrid.logger import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    engine = engine or build_engine(settings.DATABASE_URL)
    if settings.AUTO_CREATE_SCHEMA:
        create_schema(engine)

    app = FastAPI(title=settings.APP_TITLE, version="0.1.0")
    app.state.engine = engine
    app.state.ledger = Ledger(build_session_factory(engine))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS if settings.CORS_ORIGINS else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    @app.exception_handler(HabitTrackerError)
    async def handle_tracker_error(request: Request, exc: HabitTrackerError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.get("/health/live")
    def health_live() -> dict[str, str]:
        return {"status": "alive"}

    @app.get("/health/ready")
    def health_ready() -> dict[str, str]:
        ping(engine)
        return {"status": "ready"}

    return app


app = create_app()
