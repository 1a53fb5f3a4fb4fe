"""
Error kinds raised by services and route dependencies.

Every kind carries the HTTP status it maps to and a message that is safe to
show to the caller. The handlers registered in `register_error_handlers`
convert them (and unexpected database / filesystem failures) into a single
JSON envelope:

    {"detail": "<message>", "error": "<kind>"}
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from jobportal.core.logging_config import get_logger

logger = get_logger(__name__)

ACCESS_DENIED = "Access denied"
INVALID_CREDENTIALS = "Invalid email or password"


class PortalError(Exception):
    """Base class for all user-facing failures."""

    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(PortalError):
    kind = "validation"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Invalid input"


class Conflict(PortalError):
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"


class Unauthorized(PortalError):
    kind = "unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = ACCESS_DENIED


class Forbidden(PortalError):
    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = ACCESS_DENIED


class NotFound(PortalError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidCredentials(Unauthorized):
    """Login failure. Same message whether the email or the password was wrong."""

    default_message = INVALID_CREDENTIALS


class UploadRejected(PortalError):
    kind = "upload_rejected"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Upload rejected"


class UploadTooLarge(UploadRejected):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


class InternalError(PortalError):
    pass


def error_response(exc: PortalError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers that turn every error kind into a JSON outcome."""

    @app.exception_handler(PortalError)
    async def handle_portal_error(request: Request, exc: PortalError):
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
        message = f"{field}: {first.get('msg', 'invalid value')}"
        return error_response(ValidationFailed(message))

    @app.exception_handler(PyMongoError)
    async def handle_database_error(request: Request, exc: PyMongoError):
        logger.exception("Database failure on %s %s", request.method, request.url.path)
        return error_response(InternalError())

    @app.exception_handler(OSError)
    async def handle_filesystem_error(request: Request, exc: OSError):
        logger.exception("Filesystem failure on %s %s", request.method, request.url.path)
        return error_response(InternalError())
