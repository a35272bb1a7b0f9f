"""
Centralized exception handling utilities for consistent error responses.
"""
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ebee.core.logging import get_logger

logger = get_logger(__name__)

# Map HTTP status codes to error code strings
STATUS_CODE_MAP = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    500: "INTERNAL_ERROR",
    502: "BAD_GATEWAY",
}


class APIException(HTTPException):
    """Base API exception with consistent error formatting."""
    error_code: str = "ERROR"

    def __init__(self, status_code: int, detail: str, headers: Optional[dict] = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        if self.error_code == "ERROR":
            self.error_code = STATUS_CODE_MAP.get(status_code, "ERROR")


class ValidationError(APIException):
    """Missing or malformed input."""
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str = "Missing required fields"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


class AuthError(APIException):
    """No authenticated identity on the request."""
    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class PermissionDeniedError(APIException):
    """Authenticated, but the role may not do this."""
    error_code = "PERMISSION_DENIED"

    def __init__(self, message: str = "Access denied. Insufficient privileges."):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=message)


class NotFoundError(APIException):
    """Resource not found exception."""
    error_code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource", message: Optional[str] = None):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message or f"{resource} not found")


class ConflictError(APIException):
    """Resource conflict exception."""
    error_code = "CONFLICT"

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=message)


class UploadError(APIException):
    """The image host rejected or failed an upload/delete."""
    error_code = "UPLOAD_FAILED"

    def __init__(self, message: str = "Image upload failed"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


class PaymentGatewayError(APIException):
    """The payment provider failed or returned an unusable response."""
    error_code = "PAYMENT_GATEWAY_ERROR"

    def __init__(self, message: str = "Failed to initiate payment."):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=message)


class DatabaseError(APIException):
    """Catch-all for data store failures, constraint violations included."""
    error_code = "DATABASE_ERROR"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _failure(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    errors = exc.errors()
    missing = [str(err["loc"][-1]) for err in errors if err.get("type") == "missing"]
    if missing:
        return "Missing required fields: " + ", ".join(missing)
    first = errors[0] if errors else {}
    message = first.get("msg", "Invalid request")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    return f"{'.'.join(loc)}: {message}" if loc else message


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as {success: false, message}."""

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        return _failure(exc.status_code, exc.detail, exc.headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _failure(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _failure(status.HTTP_400_BAD_REQUEST, _describe_validation_errors(exc))

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error", path=request.url.path, error=str(exc), exc_info=True)
        error = DatabaseError()
        return _failure(error.status_code, error.detail)
