"""
Image API Router - On-demand image transformation
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from api.dependencies import get_image_service, get_settings_dependency
from api.exceptions import MethodError, safe_endpoint
from schemas import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def cache_control_header(max_age: int, immutable: bool) -> str:
    """
    Build the Cache-Control value for image responses.

    Example:
        >>> cache_control_header(31536000, True)
        'public, max-age=31536000, immutable'
    """
    directives = ["public", f"max-age={max_age}"]
    if immutable:
        directives.append("immutable")
    return ", ".join(directives)


@router.api_route(
    "",
    methods=ALL_METHODS,
    responses={
        200: {"content": {"image/jpeg": {}, "image/png": {}}},
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
@safe_endpoint
async def transform_image(
    request: Request,
    image_service=Depends(get_image_service),
    settings=Depends(get_settings_dependency),
) -> Response:
    """
    Serve a transformed image.

    Query parameters: bucket, path, w, h, fit, format, q, bg, crop,
    no_cache, token. Only GET is accepted.
    """
    if request.method != "GET":
        raise MethodError(request.method)

    result = await image_service.process(request.query_params.multi_items())

    return Response(
        content=result.data,
        media_type=result.content_type,
        headers={
            "Cache-Control": cache_control_header(
                settings.image.cache_max_age_seconds, settings.image.cache_immutable
            ),
            "X-Cache": "HIT" if result.cache_hit else "MISS",
            "X-Cache-Key": result.cache_key,
        },
    )
