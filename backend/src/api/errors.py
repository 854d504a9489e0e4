import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.errors import (
    ConsistencyViolation,
    MovieNightError,
    NotFoundError,
    ResourceExhaustion,
    ValidationFailure,
)

logger = logging.getLogger(__name__)


async def movie_night_error_handler(request: Request, exc: MovieNightError) -> JSONResponse:
    if isinstance(exc, NotFoundError):
        return JSONResponse(status_code=404, content={"detail": exc.message})
    if isinstance(exc, ValidationFailure):
        return JSONResponse(status_code=422, content={"detail": exc.message})
    if isinstance(exc, ResourceExhaustion):
        return JSONResponse(status_code=503, content={"detail": "Service is busy, try again later"})
    if isinstance(exc, ConsistencyViolation):
        logger.error("Consistency violation on %s %s: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("Store failure on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MovieNightError, movie_night_error_handler)
