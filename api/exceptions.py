"""
Exception taxonomy and FastAPI exception handlers for the Image CDN.

Every error that reaches the client is rendered as
``{"error": <message>, "status": <code>, "details": {...}}``.
"""

import functools
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ImageCDNException(Exception):
    """Base exception for all pipeline errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class ValidationError(ImageCDNException):
    """Bad, missing or out-of-range request parameter"""

    status_code = 400


class SignatureError(ImageCDNException):
    """Missing or invalid request signature"""

    status_code = 403

    def __init__(self, message: str = "Invalid or missing signature"):
        super().__init__(message)


class NotFoundError(ImageCDNException):
    """Origin resource absent or unreadable"""

    status_code = 404

    def __init__(self, resource: str):
        super().__init__(f"Resource not found: {resource}", details={"resource": resource})
        self.resource = resource


class MethodError(ImageCDNException):
    """Request method other than GET"""

    status_code = 405

    def __init__(self, method: str):
        super().__init__(
            "Method not allowed. Only GET requests are supported.",
            details={"method": method},
        )


class TransformError(ImageCDNException):
    """Decode or encode failure"""

    status_code = 500


class CacheError(ImageCDNException):
    """
    Cache lookup or write failure.

    Never rendered to the client: the pipeline downgrades it to a miss or
    logs it and carries on.
    """

    def __init__(self, operation: str, key: str, cause: Exception):
        super().__init__(f"Cache {operation} failed for {key}: {cause}")
        self.operation = operation
        self.key = key
        self.cause = cause


def error_body(message: str, status_code: int, details: Optional[Dict] = None) -> Dict[str, Any]:
    """Build the JSON error body."""
    body: Dict[str, Any] = {"error": message, "status": status_code}
    if details:
        body["details"] = details
    return body


def safe_endpoint(func):
    """
    Decorator for endpoints: domain exceptions pass through to their handlers,
    anything else is logged and turned into a 500.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (ImageCDNException, StarletteHTTPException):
            raise
        except Exception as e:
            logger.error(f"Unhandled error in {func.__name__}: {e}", exc_info=True)
            raise ImageCDNException(str(e) or "An unexpected error occurred") from e

    return wrapper


async def image_cdn_exception_handler(request: Request, exc: ImageCDNException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__} ({exc.status_code}): {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.status_code, exc.details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    details = exc.detail if isinstance(exc.detail, dict) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, exc.status_code, details),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=error_body(f"Internal server error: {exc}", 500),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the application."""
    app.add_exception_handler(ImageCDNException, image_cdn_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
