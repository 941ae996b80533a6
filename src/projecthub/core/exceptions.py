"""Domain errors and the exception handlers that render them.

Services raise the ProjectHubError subclasses below; the handlers registered in
setup_exception_handlers turn them into JSON responses carrying the request_id.
"""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.projecthub.core.logging import get_logger

logger = get_logger(__name__)


class ProjectHubError(Exception):
    """Base class for expected, caller-facing failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Request could not be completed"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class UnauthorizedError(ProjectHubError):
    """No resolvable caller identity where one is required."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required"


class ForbiddenError(ProjectHubError):
    """Caller is authenticated but lacks the required role."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action"


class NotFoundError(ProjectHubError):
    """Entity is absent, or the caller may not know it exists."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(ProjectHubError):
    """A state-transition precondition no longer holds."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Request conflicts with the current state"


class InvalidStateError(ProjectHubError):
    """The action is structurally disallowed for this caller or project."""

    status_code = 422
    default_detail = "Action not allowed in the current state"


class ProjectNotFoundError(NotFoundError):
    """Missing project or project hidden from the caller.

    Both cases render the same body so restricted projects cannot be probed.
    """

    default_detail = "Project not found"


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(ProjectHubError)
    async def domain_exception_handler(request: Request, exc: ProjectHubError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=headers,
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
            headers=exc.headers,
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
