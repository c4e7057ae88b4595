"""Domain errors and the handlers that turn them into JSON responses."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .log import get_logger

log = get_logger(__name__)


class GatewayError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(GatewayError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "VALIDATION_ERROR"
    default_message = "Invalid request"

    def __init__(self, message: str | None = None, field: str | None = None):
        if message is None and field:
            message = f"{field} is required"
        self.field = field
        super().__init__(message)


class AuthError(GatewayError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "UNAUTHORIZED"
    default_message = "Invalid credentials"


class ConflictError(GatewayError):
    status_code = status.HTTP_409_CONFLICT
    error = "CONFLICT"
    default_message = "Resource already exists"


class NotFoundError(GatewayError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "NOT_FOUND"
    default_message = "Not found"


class UpstreamError(GatewayError):
    error = "UPSTREAM_ERROR"
    default_message = "Failed to fetch recipes"


class StoreError(GatewayError):
    error = "STORE_ERROR"
    default_message = "Database error"


async def gateway_error_handler(request: Request, exc: GatewayError):
    # 5xx details stay in the log; callers get the generic message
    if exc.status_code >= 500:
        log.error("{} {} failed: {}", request.method, request.url.path, exc)
        message = type(exc).default_message
    else:
        message = exc.message
    headers = None
    if isinstance(exc, AuthError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GatewayError, gateway_error_handler)
