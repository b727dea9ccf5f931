"""
Exception handlers.

Maps the exception hierarchy onto HTTP responses. Internal failures get a
generic body; their detail goes to the log only.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from modules.auth.exceptions import InvalidCredentialsError
from shared.exceptions import (
    SplitwiseError,
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {
    "error": "INTERNAL_ERROR",
    "message": "Internal server error",
    "details": {},
}


def status_for(exc: SplitwiseError) -> int:
    """HTTP status for a client-visible error; 500 for everything else."""
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = ValidationError.from_errors(exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error.to_dict())


async def splitwise_error_handler(request: Request, exc: SplitwiseError) -> JSONResponse:
    status_code = status_for(exc)

    if status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.code, exc_info=exc
        )
        return JSONResponse(status_code=status_code, content=INTERNAL_ERROR_BODY)

    if isinstance(exc, AuthenticationError) and not isinstance(exc, InvalidCredentialsError):
        # Token failures are not distinguished for clients.
        logger.info("Rejected credentials: %s", exc.code)
        return JSONResponse(
            status_code=status_code,
            content={"detail": "Unauthorized"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=INTERNAL_ERROR_BODY,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SplitwiseError, splitwise_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
