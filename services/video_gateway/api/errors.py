from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from services.video_gateway.domain.errors import (
    RangeNotSatisfiableError,
    VideoGatewayError,
)

logger = logging.getLogger(__name__)


def error_response(
    message: str, status_code: int, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(VideoGatewayError)
    async def handle_gateway_error(request: Request, exc: VideoGatewayError):
        headers = None
        if isinstance(exc, RangeNotSatisfiableError):
            headers = {"Content-Range": f"bytes */{exc.total_size}"}
        if exc.status_code >= 500:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        return error_response(exc.message, exc.status_code, headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            location = ".".join(str(part) for part in errors[0].get("loc", ())[1:])
            message = f"Invalid request: {location or 'body'}"
        else:
            message = "Invalid request"
        return error_response(message, 400)
