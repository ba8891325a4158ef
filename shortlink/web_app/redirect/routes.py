"""Redirect route implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import Response

from lib.keygen import KeyGenerator
from lib.common.url_builder import location_header_value

router = APIRouter()


@router.get(
    "/g/{key}",
    status_code=status.HTTP_302_FOUND,
    responses={
        400: {"description": "Invalid key format"},
        404: {"description": "Unknown short key"},
        500: {"description": "Internal server error"},
    },
    summary="Follow short link",
)
async def redirect_to_url(request: Request, key: str):
    """Redirect to the stored URL."""
    if not KeyGenerator.is_valid_key(key):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid key format",
        )

    service = request.app.state.service

    # Resolving also counts the access
    link = await service.resolve(key)

    if link is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not Found",
        )

    # Perform 302 redirect (temporary redirect for tracking). The stored
    # URL is sent as-is apart from non-ASCII escaping.
    return Response(
        status_code=status.HTTP_302_FOUND,
        headers={"location": location_header_value(link.target_url)},
    )
