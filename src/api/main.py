from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from src.api.routes import register_routes
from src.core.config import Settings, get_settings
from src.core.logging import setup_logging
from src.domain.services import IdentityService, Notifier, ProjectService, log_notifier
from src.infrastructure.db import create_schema, dispose_engine, get_session_factory
from src.infrastructure.repositories.state import (
    InMemoryStateRepository,
    SqlStateRepository,
    StateRepository,
)
from src.libs.posts_client import PostsClient, PostsClientProtocol
from starlette.responses import Response
from structlog.contextvars import bind_contextvars, clear_contextvars

logger = structlog.get_logger()


async def _build_repository(settings: Settings) -> StateRepository:
    if settings.state_backend == "memory":
        return InMemoryStateRepository()
    await create_schema(settings)
    return SqlStateRepository(get_session_factory(settings))


def create_app(
    *,
    settings: Settings | None = None,
    repository: StateRepository | None = None,
    posts_client: PostsClientProtocol | None = None,
    notifier: Notifier = log_notifier,
) -> FastAPI:
    """Application factory for the tracker API.

    The identity and project services are built once per application in the
    lifespan hook and shared with handlers through ``app.state``.
    """
    settings = settings or get_settings()
    setup_logging(json_logs=settings.environment != "local")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owns_engine = repository is None
        state_repository = repository or await _build_repository(settings)

        identity = IdentityService(
            state_repository, auth_delay_seconds=settings.auth_delay_seconds
        )
        projects = ProjectService(
            state_repository,
            notifier=notifier,
            reference_prefix=settings.reference_prefix,
        )
        await identity.load()
        await projects.load()

        app.state.settings = settings
        app.state.repository = state_repository
        app.state.identity = identity
        app.state.projects = projects
        app.state.posts_client = posts_client or PostsClient(
            base_url=settings.posts_api_base_url,
            timeout_seconds=settings.posts_timeout_seconds,
        )

        logger.info(
            "service_startup",
            service=settings.app_name,
            environment=settings.environment,
            version=settings.version,
            state_backend=type(state_repository).__name__,
        )
        try:
            yield
        finally:
            if owns_engine and settings.state_backend != "memory":
                await dispose_engine()
            logger.info("service_shutdown", service=settings.app_name)

    app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

    cors_origins = [
        "http://localhost:3000",
        "http://localhost:5173",  # Vite dev
        "http://localhost:8080",
    ]
    if settings.environment in ["local", "development"]:
        cors_origins.append("*")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if "*" not in cors_origins else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)

    @app.middleware("http")
    async def correlation_id_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("x-request-id", str(uuid4()))
        bind_contextvars(
            request_id=request_id,
            path=str(request.url.path),
            method=request.method,
        )
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_contextvars()

    return app


app = create_app()
