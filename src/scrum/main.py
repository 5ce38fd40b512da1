import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from starlette.middleware.base import RequestResponseEndpoint

from src.scrum.api.v1.router import api_router
from src.scrum.core.config import get_settings
from src.scrum.core.db import dispose_engine, get_session
from src.scrum.core.exceptions import setup_exception_handlers
from src.scrum.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.scrum.core.rate_limit import limiter
from src.scrum.temporal.client import close_temporal_client, get_temporal_client

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await close_temporal_client()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Registration, login and token management"},
    {"name": "users", "description": "Current user profile and presence"},
    {"name": "workspaces", "description": "Workspaces, their members and spaces"},
    {"name": "spaces", "description": "Spaces and the projects inside them"},
    {"name": "projects", "description": "Projects, members, sprints, tasks and labels"},
    {"name": "sprints", "description": "Sprint lifecycle"},
    {"name": "tasks", "description": "Tasks and their comments"},
    {"name": "comments", "description": "Comment editing"},
    {"name": "labels", "description": "Label editing"},
    {"name": "notifications", "description": "The current user's notifications"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Workspaces, projects, sprints and tasks with notifications",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    # Add logging context middleware
    @app.middleware("http")
    async def logging_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind request_id to log context for all requests."""
        clear_request_context()
        bind_request_context(correlation_id.get())
        try:
            response = await call_next(request)
            return response
        finally:
            clear_request_context()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    # Correlation ID is added last so it is the outermost middleware
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(api_router)

    # Prometheus metrics instrumentation
    instrumentator = Instrumentator().instrument(app)

    # Protect /metrics endpoint if API key is configured
    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")

    @app.get("/health")
    async def health() -> JSONResponse:
        """Health check. The database is required; Temporal being down only degrades."""
        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "unknown",
            "temporal": "unknown",
        }

        try:
            async with get_session() as session:
                await session.execute(text("SELECT 1"))
            health_status["database"] = "healthy"
        except Exception as e:
            health_status["database"] = f"unhealthy: {str(e)}"
            health_status["status"] = "unhealthy"

        try:
            await get_temporal_client()
            health_status["temporal"] = "healthy"
        except Exception as e:
            health_status["temporal"] = f"unhealthy: {str(e)}"
            if health_status["status"] == "healthy":
                health_status["status"] = "degraded"

        status_code = 200 if health_status["status"] != "unhealthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    return app


app = create_app()
