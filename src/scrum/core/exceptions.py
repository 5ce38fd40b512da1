"""Domain errors and the exception handlers that render them with request_id."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.scrum.core.logging import get_logger

logger = get_logger(__name__)


class DomainError(Exception):
    """Base class for failures raised by the service layer."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND

    @classmethod
    def for_entity(cls, entity: str, entity_id: object) -> "NotFoundError":
        return cls(f"{entity} {entity_id} not found")


class AlreadyExistsError(DomainError):
    status_code = status.HTTP_409_CONFLICT


class AlreadyMemberError(AlreadyExistsError):
    """Raised when a membership row already exists for (scope, user)."""


class UnauthorizedError(DomainError):
    """The actor lacks rights over this specific resource."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidTransitionError(DomainError):
    """Illegal sprint state-machine move."""

    status_code = status.HTTP_409_CONFLICT


class InvalidOperationError(DomainError):
    status_code = status.HTTP_409_CONFLICT


class ValidationError(DomainError):
    status_code = 422


def _error_response(
    status_code: int, detail: object, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        logger.info(
            "Domain error",
            error=type(exc).__name__,
            detail=exc.detail,
            path=request.url.path,
        )
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail, exc.headers)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail, exc.headers)

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
