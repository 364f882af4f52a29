"""FastAPI application setup."""

import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from ..app import Application
from ..config import resolve_public_dir
from ..errors import BadRequest, TalkNotFound
from ..logging_config import get_logger
from .routes import control, talks

logger = get_logger(__name__)


def create_fastapi_app(
    application: Application | None = None,
    public_dir: str | Path | None = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    if application is None:
        application = Application()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="Skill Sharing API",
        description="Talk proposals with a long-polling change feed",
        version="0.1.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @fastapi_app.exception_handler(TalkNotFound)
    async def talk_not_found(request: Request, exc: TalkNotFound) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=404)

    @fastapi_app.exception_handler(BadRequest)
    async def bad_request(request: Request, exc: BadRequest) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=400)

    fastapi_app.include_router(talks.create_talks_router(application))
    fastapi_app.include_router(control.create_control_router(application))

    # Everything else is served from the public directory
    static_root = resolve_public_dir(public_dir or os.getenv("PUBLIC_DIR"))
    if static_root.is_dir():
        fastapi_app.mount(
            "/", StaticFiles(directory=static_root, html=True), name="public"
        )
    else:
        logger.warning("Public directory %s not found, static files disabled", static_root)

    return fastapi_app
