"""
Error taxonomy and the handlers that turn errors into the API's response envelope.

Every failure response has the shape ``{"success": false, "error": <message>}``.
Domain and validation errors map to 400, storage and mail failures to 500.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class JobBoardError(Exception):
    """Base class for errors reported to API clients."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(JobBoardError):
    default_message = "Invalid request"


class AlreadyApplied(JobBoardError):
    default_message = "Already applied for this job"


class UserNotFound(JobBoardError):
    default_message = "User not found. Please sign up first."


class InvalidCode(JobBoardError):
    default_message = "Invalid OTP code"


class Expired(JobBoardError):
    default_message = "OTP has expired"


class NotFound(JobBoardError):
    default_message = "Record not found"


class StorageError(JobBoardError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database error"


class MailError(JobBoardError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to send email"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" segment
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(messages) or "Invalid request"


async def job_board_error_handler(request: Request, exc: JobBoardError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _format_validation_errors(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JobBoardError, job_board_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
