from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException

from .api import health_check, v1_router, RequestIDMiddleware
from .core import (
    settings,
    init_db,
    close_db,
    setup_logging,
    job_board_exception_handler,
    custom_http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)
from .services import JobBoardError


@asynccontextmanager
async def lifespan(app: FastAPI):
    owns_db = getattr(app.state, "db", None) is None
    owns_http = getattr(app.state, "http_client", None) is None
    if owns_db:
        await init_db(app)
    if owns_http:
        app.state.http_client = httpx.AsyncClient(timeout=settings.SENDGRID_TIMEOUT_SECONDS)
    try:
        yield
    finally:
        if owns_http:
            await app.state.http_client.aclose()
        if owns_db:
            await close_db(app)


def create_app(database=None, http_client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """
    configure and create the FastAPI application instance.

    `database` and `http_client` are normally created by the lifespan
    handler; passing them in binds the app to existing clients instead.
    """
    setup_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.db = database
    app.state.http_client = http_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(JobBoardError, job_board_exception_handler)
    app.add_exception_handler(HTTPException, custom_http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health_check)
    app.include_router(v1_router)

    return app
