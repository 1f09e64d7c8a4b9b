from __future__ import annotations
from typing import Any, Dict, Optional
import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ReelRevealError(Exception):
    """
    Base exception for the application.
    Carries the HTTP status it maps to and the fields of the JSON error body.
    """
    status_code: int = 500

    def __init__(
        self,
        error: str,
        *,
        message: Optional[str] = None,
        details: Optional[str] = None,
        upstream_status: Optional[int] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(error)
        self.error: str = error
        self.message: Optional[str] = message
        self.details: Optional[str] = details
        self.upstream_status: Optional[int] = upstream_status
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        if self.details is not None:
            body["details"] = self.details
        if self.upstream_status is not None:
            body["status"] = self.upstream_status
        return body


class BadRequestError(ReelRevealError):
    """Required input is missing or malformed."""
    status_code = 400


class NotFoundError(ReelRevealError):
    status_code = 404


class UpstreamUnavailableError(ReelRevealError):
    """
    An external provider answered non-2xx or could not be reached.
    Search-stage failures surface as 502; generation-stage ones pass status_code=500.
    """
    status_code = 502


class ServerMisconfiguredError(ReelRevealError):
    """A required credential is absent from configuration."""
    status_code = 500


async def reelreveal_exception_handler(request: Request, exc: ReelRevealError) -> JSONResponse:
    """
    Convert application errors into JSON bodies.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    extra: Dict[str, Any] = {
        "request_id": request_id,
        "path": request.url.path,
        "upstream_status": exc.upstream_status,
        "upstream_body": exc.details,
    }
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.error, exc.message or exc.details or "", extra=extra)
    else:
        logger.warning("HTTP %s: %s", exc.status_code, exc.error, extra=extra)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Routing-level errors (unknown path, wrong method) in the same body shape.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    logger.info("HTTP %s error", exc.status_code, extra={"request_id": request_id, "path": request.url.path})
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle Pydantic validation errors of request bodies as bad requests.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    logger.info("Validation error", extra={"request_id": request_id, "path": request.url.path})
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all: anything not mapped above becomes a 500 JSON response.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    logger.error(
        "Unhandled exception occurred",
        extra={"request_id": request_id, "path": request.url.path},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "message": str(exc)},
    )
