import logging

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.services.exceptions import EmailDeliveryError, InternalServiceError, JobBoardError

logger = logging.getLogger(__name__)


def _error_body(request: Request, code: str, message: str, details=None) -> dict:
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error, "request_id": getattr(request.state, "request_id", None)}


async def job_board_exception_handler(request: Request, exc: JobBoardError) -> JSONResponse:
    # Provider payloads of internal errors are logged, never returned
    details = exc.details if isinstance(exc, EmailDeliveryError) else None
    if isinstance(exc, InternalServiceError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.details!r})")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(_error_body(request, exc.code, exc.message, details)),
    )


async def custom_http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, "http-error", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder(
            _error_body(request, "invalid-argument", "Request validation failed", exc.errors())
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(request, "internal", "Internal server error"),
    )
