"""Translate domain errors into HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from devtrack.exceptions import (
    DevTrackError,
    DeviceAlreadyIssuedError,
    DeviceNotFoundError,
    DuplicateDeviceIdError,
    ImmutableDeviceFieldError,
    InvalidCredentialsError,
    InvalidIssueStateError,
    InvalidTokenError,
    UsernameTakenError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[DevTrackError], int] = {
    DuplicateDeviceIdError: status.HTTP_400_BAD_REQUEST,
    InvalidIssueStateError: status.HTTP_400_BAD_REQUEST,
    ImmutableDeviceFieldError: status.HTTP_400_BAD_REQUEST,
    UsernameTakenError: status.HTTP_400_BAD_REQUEST,
    DeviceNotFoundError: status.HTTP_404_NOT_FOUND,
    DeviceAlreadyIssuedError: status.HTTP_409_CONFLICT,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    InvalidTokenError: status.HTTP_401_UNAUTHORIZED,
}


def status_for(exc: DevTrackError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DevTrackError) -> JSONResponse:
    code = status_for(exc)
    logger.info("%s %s -> %d %s", request.method, request.url.path, code, exc.message)
    return JSONResponse(status_code=code, content={"message": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DevTrackError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
