#!/usr/bin/env python3
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from config import (DB_PATH, ALLOWED_ORIGINS, API_PREFIXES, MAX_REQUEST_SIZE_MB, GZIP_MIN_SIZE,
                    HTTP_REQUEST_ENTITY_TOO_LARGE)
from database import DatabaseManager
from endpoints import get_all_routers
from models import HealthResponse
from security import PasswordHasher
from utils import timestamp

logger = logging.getLogger("messageboard.app")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # Request size limit (1MB)
        content_length = request.headers.get("content-length")
        if content_length and int(content_length) > MAX_REQUEST_SIZE_MB * 1024 * 1024:
            return JSONResponse(
                status_code=HTTP_REQUEST_ENTITY_TOO_LARGE,
                content={"message": "Request entity too large"}
            )

        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return response


def create_app(db: Optional[DatabaseManager] = None, hasher: Optional[PasswordHasher] = None) -> FastAPI:
    """Build the API around an explicit store and password hasher."""
    db = db or DatabaseManager(DB_PATH)
    hasher = hasher or PasswordHasher()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await db.connect()
        try:
            yield
        finally:
            await db.close()

    app = FastAPI(title="Message Board API", description="Anonymous boards, threads and replies",
                  version="1.0.0", lifespan=lifespan)
    app.state.db = db
    app.state.hasher = hasher

    app.add_middleware(GZipMiddleware, minimum_size=GZIP_MIN_SIZE)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"]
    )

    for router in get_all_routers(db, hasher):
        for prefix in API_PREFIXES:
            app.include_router(router, prefix=prefix)

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(status="healthy", timestamp=timestamp(), database=db.db_path)

    return app


app = create_app()
