# File: landpro/main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from landpro.api.functions import router as functions_router
from landpro.api.v1.api import api_router
from landpro.core.config import settings
from landpro.core.errors import register_exception_handlers
from landpro.core.logging import setup_logging
from landpro.core.middleware import RequestTimingMiddleware
from landpro.db.init_db import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        init_db()
    yield


def create_application() -> FastAPI:
    setup_logging(settings.log_level, json_output=settings.log_format == "json")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # ---------- CORS ----------
    origins = [str(o).rstrip("/") for o in settings.backend_cors_origins]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)

    # ---------- ERRORS ----------
    register_exception_handlers(app)

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_v1_prefix)
    app.include_router(functions_router, prefix=settings.functions_prefix, tags=["functions"])

    @app.get("/healthz", tags=["health"])
    def healthz():
        return {"status": "ok", "version": settings.VERSION}

    return app


app = create_application()
