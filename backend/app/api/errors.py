"""API error taxonomy and exception handlers."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.app.api import envelope
from backend.app.api.messages import ErrorMessages

logger = logging.getLogger(__name__)

# Non-standard status used for invalid or expired tokens
HTTP_498_INVALID_TOKEN = 498


class ApiError(Exception):
    """Error answered with an error envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = ErrorMessages.SOMETHING_WRONG

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class TokenNotFound(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = ErrorMessages.TOKEN_NOT_FOUND


class InvalidToken(ApiError):
    status_code = HTTP_498_INVALID_TOKEN
    default_message = ErrorMessages.INVALID_TOKEN


class OrganizationNotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = ErrorMessages.ORGANIZATION_NOT_FOUND


class UserNotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = ErrorMessages.USER_NOT_FOUND


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = ErrorMessages.UNAUTHORIZED


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class AlreadyExists(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = ErrorMessages.INVALID_DATA


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Answer an ApiError with its own message and status."""
    return envelope.error(exc.message, exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer request validation failures with 400."""
    logger.info(
        "Request validation failed: %s %s",
        request.method,
        request.url.path,
        extra={"structured": {"errors": exc.errors()}},
    )
    return envelope.error(ErrorMessages.INVALID_DATA, status.HTTP_400_BAD_REQUEST)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer any other fault with a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return envelope.error(ErrorMessages.SOMETHING_WRONG, status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-producing exception handlers."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
