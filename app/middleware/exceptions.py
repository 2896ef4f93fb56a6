from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError
from app.schemas.response import ErrorResponse, ErrorDetail
from datetime import datetime, timezone
import logging
import uuid

logger = logging.getLogger(__name__)

def _get_error_code(status_code: int) -> str:
    code_map = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        500: "INTERNAL_SERVER_ERROR",
    }
    return code_map.get(status_code, f"HTTP_{status_code}")

def _error_response(request: Request, request_id: str, status_code: int, code: str, message: str, details=None) -> JSONResponse:
    error_response = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=str(request.url),
        request_id=request_id
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(error_response))

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    logger.warning(f"[{request_id}] Validation error: {exc.errors()}", extra={"request_id": request_id})
    return _error_response(
        request, request_id, 422, "VALIDATION_ERROR", "Request validation failed",
        details={"validation_errors": jsonable_encoder(exc.errors())}
    )

async def global_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())

    if isinstance(exc, HTTPException):
        logger.warning(f"[{request_id}] HTTP {exc.status_code}: {exc.detail}", extra={"request_id": request_id})
        return _error_response(
            request, request_id, exc.status_code, _get_error_code(exc.status_code),
            exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        )

    if isinstance(exc, IntegrityError):
        logger.warning(f"[{request_id}] Integrity error: {exc.orig}", extra={"request_id": request_id})
        return _error_response(request, request_id, 409, "CONFLICT", "The request conflicts with stored data")

    logger.error(f"[{request_id}] Unhandled exception: {exc}", exc_info=True, extra={"request_id": request_id})
    return _error_response(
        request, request_id, 500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred",
        details={"error_type": type(exc).__name__}
    )
