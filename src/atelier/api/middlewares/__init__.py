"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.atelier.api.dependencies.auth import get_access_router
from src.atelier.core.config import Settings
from src.atelier.core.security import SecurityHeadersMiddleware

from .access_router import AccessRouterMiddleware, SessionIdentity
from .logging_context import logging_context_middleware

__all__ = [
    "setup_middlewares",
    "AccessRouterMiddleware",
    "SessionIdentity",
    "logging_context_middleware",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Configure all application middlewares.

    Each add_middleware call wraps the previous ones, so the last one added
    sees the request first.
    """
    # Navigation gate - innermost, runs with request_id already bound
    app.add_middleware(AccessRouterMiddleware, router=get_access_router())

    # Security headers (Helmet-style)
    csp = None
    if not settings.enable_openapi and settings.csp_production:
        csp = settings.csp_production
    app.add_middleware(SecurityHeadersMiddleware, content_security_policy=csp)

    # Logging context - binds request_id to structlog context
    @app.middleware("http")
    async def _logging_context(request, call_next):  # type: ignore[no-untyped-def]
        return await logging_context_middleware(request, call_next)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    # Correlation ID - generates/propagates X-Request-ID; outermost
    app.add_middleware(CorrelationIdMiddleware)
