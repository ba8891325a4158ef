"""Management API routes implementation."""

from fastapi import APIRouter, Request, status

from .schemas import (
    CreateRedirectRequest,
    CreateRedirectResponse,
    RedirectItem,
    RedirectListResponse,
    DeleteRedirectResponse,
    ErrorResponse,
)
from lib.common.url_builder import build_short_url
from lib.common.headers import resolve_public_host

router = APIRouter()


@router.post(
    "/",
    response_model=CreateRedirectResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request body or URL"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Shorten a URL. Optionally give the link a lifetime in seconds.",
)
async def create_redirect(request: Request, body: CreateRedirectRequest):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config

    link = await service.create_redirect(
        target_url=body.url,
        expires_in=body.expires_in,
    )

    host = resolve_public_host(
        headers=dict(request.headers),
        configured_host=config.public_host,
    )

    return CreateRedirectResponse(short_url=build_short_url(key=link.key, host=host))


@router.get(
    "/",
    response_model=RedirectListResponse,
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
    summary="List short URLs",
    description="List every stored short link with its redirect count.",
)
async def list_redirects(request: Request):
    """List stored short links."""
    service = request.app.state.service

    links = await service.list_redirects()

    return RedirectListResponse(
        urls=[
            RedirectItem(key=link.key, url=link.target_url, redirect_count=link.access_count)
            for link in links
        ]
    )


@router.delete(
    "/{key}",
    response_model=DeleteRedirectResponse,
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
    summary="Delete short URL",
    description="Delete a short link. Deleting an unknown key succeeds.",
)
async def delete_redirect(request: Request, key: str):
    """Delete a short link."""
    service = request.app.state.service

    await service.delete_redirect(key)

    return DeleteRedirectResponse(message="Redirect deleted successfully")
