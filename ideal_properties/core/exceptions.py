"""
Error taxonomy for the contact relay and review functions.

Every error renders as one JSON object ``{"error": <message>, ...extra}``
with an HTTP status reflecting its category. The CORS headers are attached
so browsers can read the body of a failed cross-origin call.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from ideal_properties.core.cors import CORS_HEADERS

logger = logging.getLogger(__name__)


class FunctionError(Exception):
    """Base class for errors returned by the edge functions."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None, extra: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra or {}

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.message}
        body.update(self.extra)
        return body


class ConfigurationError(FunctionError):
    """A required secret or address is missing."""

    status_code = 500


class ValidationError(FunctionError):
    """The request body is malformed or missing required fields."""

    status_code = 400


class UpstreamRejected(FunctionError):
    """A third-party API answered with a non-success result."""

    status_code = 502


class NotFound(FunctionError):
    status_code = 404


class UnexpectedError(FunctionError):
    status_code = 500


async def function_error_handler(request: Request, exc: FunctionError) -> JSONResponse:
    """Render a FunctionError as a JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed with {exc.status_code}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected with {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=CORS_HEADERS,
    )
