"""Domain errors and the handlers that turn them into JSON responses."""

from enum import Enum

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.atelier.core.logging import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    """Tag carried by every domain error."""

    AUTH = "auth"
    STORE = "store"
    INSUFFICIENT_CREDITS = "insufficient_credits"
    UPLOAD = "upload"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_TRANSITION = "invalid_transition"
    VALIDATION = "validation"


class AtelierError(Exception):
    """Base class for errors surfaced to the caller."""

    kind: ErrorKind
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(AtelierError):
    """Session missing, invalid, expired or revoked."""

    kind = ErrorKind.AUTH
    status_code = status.HTTP_401_UNAUTHORIZED


class StoreError(AtelierError):
    """The relational store reported a failure."""

    kind = ErrorKind.STORE
    status_code = status.HTTP_502_BAD_GATEWAY


class InsufficientCredits(AtelierError):
    """Caller's points balance does not cover the offering cost."""

    kind = ErrorKind.INSUFFICIENT_CREDITS
    status_code = status.HTTP_402_PAYMENT_REQUIRED

    def __init__(self, balance: int, cost: int):
        super().__init__(f"Insufficient credits: balance {balance}, cost {cost}")
        self.balance = balance
        self.cost = cost


class UploadError(AtelierError):
    """Object storage failed to store or serve a file."""

    kind = ErrorKind.UPLOAD
    status_code = status.HTTP_502_BAD_GATEWAY


class PermissionDenied(AtelierError):
    kind = ErrorKind.PERMISSION
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(AtelierError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(AtelierError):
    kind = ErrorKind.CONFLICT
    status_code = status.HTTP_409_CONFLICT


class InvalidTransition(AtelierError):
    """Status change not allowed for the caller's role."""

    kind = ErrorKind.INVALID_TRANSITION
    status_code = status.HTTP_409_CONFLICT


class DomainValidationError(AtelierError):
    kind = ErrorKind.VALIDATION
    status_code = 422


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(AtelierError)
    async def atelier_error_handler(request: Request, exc: AtelierError) -> JSONResponse:
        logger.info(
            "Request failed",
            kind=exc.kind.value,
            path=request.url.path,
            detail=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.message,
                "kind": exc.kind.value,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
