"""
Exception handlers for the workout API.

Every rejected gesture answers with the envelope produced by
WorkoutMapError.to_dict(): {"error": {"code", "message", "details"}}.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import ErrorCode, WorkoutMapError

logger = logging.getLogger(__name__)


def _envelope(exc: WorkoutMapError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def workout_map_error_handler(request: Request, exc: WorkoutMapError) -> JSONResponse:
    """Aborted gestures: invalid input, unknown workout, failed save."""
    logger.info(f"{request.method} {request.url.path} rejected: {exc.code.value}")
    return _envelope(exc)


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Request bodies that do not match the gesture schemas."""
    errors = [
        {"field": ".".join(str(x) for x in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return _envelope(WorkoutMapError(
        "Request validation failed",
        code=ErrorCode.VALIDATION_ERROR,
        status_code=422,
        details={"errors": errors},
    ))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _envelope(WorkoutMapError("An unexpected error occurred"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WorkoutMapError, workout_map_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
