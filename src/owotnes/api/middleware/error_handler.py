"""
Error handling middleware for API

Converts exceptions raised inside endpoints into the standard ErrorResponse
body:
- Validation errors (bad request format) → 422
- Bridge errors (models.errors) → status by error type
- Anything else → 500
"""

import uuid
from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from owotnes.api.schemas.error import ErrorDetail, ErrorResponse, ValidationErrorResponse
from owotnes.models.enums import LogCategory
from owotnes.models.errors import BridgeError, ConfigError, FrameSizeError, RomLoadError, TransportClosedError
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

STATUS_BY_ERROR: Dict[Type[BridgeError], int] = {
    RomLoadError: status.HTTP_502_BAD_GATEWAY,
    TransportClosedError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ConfigError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    FrameSizeError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: BridgeError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_400_BAD_REQUEST


def _json(status_code: int, response) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        request_id = str(uuid.uuid4())
        errors = exc.errors()
        log.warn(f"Validation error: {len(errors)} errors", request_id=request_id, path=request.url.path)

        validation_errors = [
            {
                "field": ".".join(str(x) for x in error["loc"][1:]),  # Skip "body"
                "message": error["msg"],
                "type": error["type"],
            }
            for error in errors
        ]

        response = ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(errors)},
            ),
            validation_errors=validation_errors,
            request_id=request_id,
        )
        return _json(status.HTTP_422_UNPROCESSABLE_ENTITY, response)

    @app.exception_handler(BridgeError)
    async def bridge_exception_handler(request: Request, exc: BridgeError):
        request_id = str(uuid.uuid4())
        log.warn(f"Bridge error: {exc.code} - {exc.message}", request_id=request_id)

        response = ErrorResponse(
            error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details),
            request_id=request_id,
        )
        return _json(status_for(exc), response)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        request_id = str(uuid.uuid4())
        log.error(
            f"Unexpected error: {type(exc).__name__}: {exc}",
            request_id=request_id,
            path=request.url.path,
        )

        response = ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred.",
                details={"request_id": request_id},
            ),
            request_id=request_id,
        )
        return _json(status.HTTP_500_INTERNAL_SERVER_ERROR, response)
