"""
FastAPI app factory for the daily tasks service.

Run with `python main.py`, the `daily-tasks-api` script, or
`uvicorn main:create_app --factory`.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, load_settings
from core.db import Database
from core.errors import STORE_ERRORS, register_exception_handlers
from core.logging_config import setup_logging
from records import router as records_router

logger = logging.getLogger(__name__)

SERVICE_NAME = "daily-tasks-api"


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One pool per process. An unreachable store aborts startup.
        try:
            db = database or Database.from_settings(settings)
            await db.connect()
        except Exception:
            logger.exception("db_startup_failed")
            raise
        app.state.db = db
        try:
            yield
        finally:
            await db.close()

    app = FastAPI(title=SERVICE_NAME, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.info(
                "request method=%s path=%s status=%s latency_ms=%d",
                request.method,
                request.url.path,
                status_code,
                (time.perf_counter() - started) * 1000,
            )

    register_exception_handlers(app)
    app.include_router(records_router.router, tags=["data"])

    @app.get("/health")
    async def health(request: Request):
        try:
            await request.app.state.db.ping()
        except STORE_ERRORS:
            logger.warning("health_check_failed", exc_info=True)
            return JSONResponse(status_code=503, content={"status": "unavailable"})
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "daily tasks api"}

    return app


def run() -> None:
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
