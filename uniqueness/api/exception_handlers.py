from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from uniqueness.api.schemas import ErrorOut, ValidationErrorOut
from uniqueness.domain.exceptions import ModelValidationError, UnexpectedTypeError

logger = logging.getLogger("uniqueness.api")


def _request_extra(request: Request, *, status_code: int) -> dict[str, object]:
    # Metadata only; messages may quote submitted values, so they are not logged.
    return {
        "request_id": request.headers.get("X-Request-ID"),
        "http_method": request.method,
        "request_path": request.url.path,  # no query string
        "status_code": status_code,
    }


def register_exception_handlers(app: FastAPI) -> None:
    """Map validation and argument-type errors to JSON responses on a host app."""

    @app.exception_handler(ModelValidationError)
    async def handle_model_validation_error(
        request: Request,
        exc: ModelValidationError,
    ) -> JSONResponse:
        logger.info(
            "Record validation failed",
            extra={
                **_request_extra(request, status_code=422),
                "error_count": sum(len(m) for m in exc.errors.values()),
            },
        )
        body = ValidationErrorOut(detail=exc.message, errors=exc.errors)
        return JSONResponse(status_code=422, content=body.model_dump())

    @app.exception_handler(UnexpectedTypeError)
    async def handle_unexpected_type_error(
        request: Request,
        exc: UnexpectedTypeError,
    ) -> JSONResponse:
        logger.info("Unexpected argument type", extra=_request_extra(request, status_code=400))
        return JSONResponse(status_code=400, content=ErrorOut(detail=exc.message).model_dump())
