import asyncio
import secrets
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from src.atelier.api.dependencies import StorageDep, get_access_router
from src.atelier.api.middlewares import setup_middlewares
from src.atelier.api.pages import create_pages_router
from src.atelier.api.v1.router import api_router
from src.atelier.core.config import get_settings
from src.atelier.core.db import dispose_engine, get_session
from src.atelier.core.exceptions import setup_exception_handlers
from src.atelier.core.logging import get_logger, setup_logging
from src.atelier.core.rate_limit import limiter
from src.atelier.core.redis import close_redis, get_redis

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}", env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await close_redis()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Sign-up, sign-in and sessions"},
    {"name": "profiles", "description": "Profiles, roles and the designer roster"},
    {"name": "offerings", "description": "Catalog of orderable offerings"},
    {"name": "projects", "description": "Project workflow: create, assign, complete, delete"},
    {"name": "pages", "description": "Role-gated page view models"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Design project management for clients, project managers and designers",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    setup_middlewares(app, settings)

    app.include_router(api_router)
    app.include_router(create_pages_router(get_access_router()))

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
    async def health(storage: StorageDep) -> JSONResponse:
        """Health check of the database, object storage and (optional) Redis."""
        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "unknown",
            "storage": "unknown",
            "redis": "not_configured",
            "timestamp": time.time(),
        }

        try:
            async with get_session() as session:
                await session.execute(text("SELECT 1"))
            health_status["database"] = "healthy"
        except Exception as e:
            health_status["database"] = f"unhealthy: {str(e)}"
            health_status["status"] = "unhealthy"

        try:
            await asyncio.to_thread(storage.healthcheck)
            health_status["storage"] = "healthy"
        except (BotoCoreError, ClientError) as e:
            health_status["storage"] = f"unhealthy: {str(e)}"
            health_status["status"] = "unhealthy"

        # Redis being down is "degraded", not fully unhealthy
        redis = await get_redis()
        if redis:
            try:
                await redis.ping()
                health_status["redis"] = "healthy"
            except Exception as e:
                health_status["redis"] = f"unhealthy: {str(e)}"
                if health_status["status"] == "healthy":
                    health_status["status"] = "degraded"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    return app


app = create_app()
