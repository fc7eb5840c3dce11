"""
Exception handlers: every error leaves the API as
``{"success": false, "error": ..., "timestamp": ...}``.
"""

import logging
import traceback
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hisaabu.core.errors import AppError

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error_response(status_code: int, content: dict) -> JSONResponse:
    content.setdefault("success", False)
    content["timestamp"] = _timestamp()
    return JSONResponse(status_code=status_code, content=content)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message
        )
    return _error_response(exc.status_code, exc.to_dict())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = []
    for error in exc.errors():
        # drop the leading "body"/"query" segment
        loc = [str(part) for part in error.get("loc", ())][1:]
        details.append({"field": ".".join(loc), "message": error.get("msg", "")})

    logger.info("Validation error on %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        {"error": "Validation error", "details": details},
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return _error_response(
            exc.status_code,
            {
                "error": "Not found",
                "message": f"Route {request.method} {request.url.path} not found",
            },
        )
    return _error_response(exc.status_code, {"error": str(exc.detail)})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled %s on %s %s at %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        _timestamp(),
    )

    settings = request.app.state.settings
    if settings.is_production:
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "Internal server error"}
        )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {
            "error": str(exc) or "Internal server error",
            "stack": "".join(traceback.format_exception(exc)),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
