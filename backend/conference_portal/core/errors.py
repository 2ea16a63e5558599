import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PortalError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class MissingField(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Missing required fields"


class InvalidSelection(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid category or region"


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class EmailMismatch(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email does not match registration record"


class UnsupportedMediaType(PortalError):
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    message = "Unsupported file type"


class PayloadTooLarge(PortalError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    message = "File too large"


class Unauthorized(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class Internal(PortalError):
    pass


async def portal_error_handler(request: Request, exc: PortalError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = ", ".join(str(err["loc"][-1]) for err in exc.errors() if err.get("loc"))
    logger.warning(f"Rejected {request.method} {request.url.path}: invalid input ({fields})")
    return await portal_error_handler(request, MissingField())


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": Internal.message},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
