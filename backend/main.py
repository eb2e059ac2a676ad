from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.db import dispose_engine
from backend.db_init import init_db
from backend.errors import AuthError, StoreError
from backend.routes import auth, bootstrap, entries, events, settings

logger = logging.getLogger("backend")


def create_app() -> FastAPI:
    logging.basicConfig(
        level=os.getenv("BACKEND_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    app = FastAPI(title="MindJournal API", version="0.1.0")

    app.include_router(auth.router)
    app.include_router(bootstrap.router)
    app.include_router(entries.router)
    app.include_router(events.router)
    app.include_router(settings.router)

    @app.on_event("startup")
    async def _startup():
        await init_db()

    @app.on_event("shutdown")
    async def _shutdown():
        await dispose_engine()

    @app.exception_handler(AuthError)
    async def _auth_error_handler(request: Request, exc: AuthError):
        logger.info("Auth error on %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(StoreError)
    async def _store_error_handler(request: Request, exc: StoreError):
        if exc.status_code >= 500:
            logger.error("Store error on %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(SQLAlchemyError)
    async def _database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s", request.url.path)
        reason = str(getattr(exc, "orig", None) or exc).splitlines()[0]
        return JSONResponse(status_code=500, content={"detail": f"Database error: {reason}"})

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal error"})

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


app = create_app()
