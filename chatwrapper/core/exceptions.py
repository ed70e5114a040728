"""Application exception classes and handlers."""

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

logger = structlog.get_logger()

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, code: str, status_code: int = 400) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


# --- Validation (400) ---


class ValidationError(AppException):
    """Missing or malformed request field."""

    def __init__(self, message: str = "Invalid request", field: str | None = None) -> None:
        if field is not None:
            message = f"Missing or invalid field: {field}"
        self.field = field
        super().__init__(message=message, code="VALIDATION_ERROR", status_code=400)


class ConflictError(AppException):
    """Resource already exists."""

    def __init__(self, message: str = "Resource already exists", code: str = "CONFLICT") -> None:
        super().__init__(message=message, code=code, status_code=400)


class LoginNameTakenError(ConflictError):
    """A user with this login name already exists."""

    def __init__(self) -> None:
        super().__init__(
            message="A user with this login name already exists",
            code="LOGIN_NAME_TAKEN",
        )


class SelfDeleteError(AppException):
    """Admins may not delete their own account."""

    def __init__(self) -> None:
        super().__init__(
            message="You cannot delete your own account",
            code="SELF_DELETE",
            status_code=400,
        )


# --- Authentication (401) ---


class AuthenticationError(AppException):
    """Base authentication error."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message=message, code="AUTHENTICATION_ERROR", status_code=401)


class InvalidCredentialsError(AppException):
    """Invalid login name or password."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(
            message=message,
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


# --- Authorization (403) ---


class AuthorizationError(AppException):
    """Insufficient permissions."""

    def __init__(self, message: str = "Admin only") -> None:
        super().__init__(message=message, code="AUTHORIZATION_ERROR", status_code=403)


# --- Not Found (404) ---


class NotFoundError(AppException):
    """Requested resource does not exist."""

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND") -> None:
        super().__init__(message=message, code=code, status_code=404)


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self) -> None:
        super().__init__(message="User not found", code="USER_NOT_FOUND")


# --- Rate Limit (429) ---


class RateLimitError(AppException):
    """Fixed-window limit exceeded."""

    def __init__(
        self, message: str = "Too many requests. Please wait and try again later."
    ) -> None:
        super().__init__(
            message=message,
            code="RATE_LIMIT_EXCEEDED",
            status_code=429,
        )


# --- Upstream (500) ---


class UpstreamError(AppException):
    """The completion service failed or returned unusable data."""

    def __init__(self, message: str = "Failed to get a response from the assistant") -> None:
        super().__init__(message=message, code="UPSTREAM_ERROR", status_code=500)


# --- Exception Handlers ---


def error_body(status: int, message: str, code: str) -> dict:
    """Build the JSON error payload shared by all handlers."""
    return {"status": status, "message": message, "code": code}


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Central exception handler for AppException."""
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            path=request.url.path,
            code=exc.code,
            cause=repr(exc.__cause__) if exc.__cause__ else None,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.message, exc.code),
    )


def _field_name(loc: tuple) -> str:
    """Pick the wire name of the offending field out of a pydantic error location."""
    parts = [str(p) for p in loc if not isinstance(p, int)]
    if parts and parts[0] in _LOCATION_PREFIXES and len(parts) > 1:
        parts = parts[1:]
    return ".".join(parts) or "body"


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as 400 naming the first bad field."""
    errors = exc.errors()
    field = _field_name(tuple(errors[0].get("loc", ()))) if errors else "body"
    error = ValidationError(field=field)
    return JSONResponse(
        status_code=error.status_code,
        content=error_body(error.status_code, error.message, error.code),
    )


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Custom handler for the global slowapi ceiling."""
    error = RateLimitError()
    return JSONResponse(
        status_code=error.status_code,
        content=error_body(error.status_code, error.message, error.code),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide their details from the caller."""
    logger.exception("Unhandled error", method=request.method, path=request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_body(500, "Internal server error", "INTERNAL_ERROR"),
    )
