"""Translation of domain and database errors into HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..db import DatabaseError
from ..domain import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.VALIDATION_FAILURE: 400,
    ErrorCode.CONFLICT: 409,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.INTERNAL_INCONSISTENCY: 500,
}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.code is ErrorCode.INTERNAL_INCONSISTENCY:
        logger.error(f"{request.method} {request.url.path} hit an inconsistency: {exc}")
    return JSONResponse(
        status_code=STATUS_BY_CODE[exc.code],
        content={"error": exc.code.value, "detail": exc.message},
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed with a database error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "DATABASE_ERROR", "detail": "Database error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
