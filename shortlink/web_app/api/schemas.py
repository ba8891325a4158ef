"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from lib.common.validators import is_valid_url
from lib.service import MAX_EXPIRES_IN


class CreateRedirectRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(default="", description="The URL to shorten", validate_default=True)
    expires_in: Optional[int] = Field(
        None,
        description="Optional lifetime of the short link in seconds",
        ge=1,
        le=MAX_EXPIRES_IN,
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        is_valid, error = is_valid_url(v)
        if not is_valid:
            raise ValueError(error)
        return v

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "https://github.com/user/repo", "expires_in": 86400},
            ]
        }
    }


class CreateRedirectResponse(BaseModel):
    """Response after shortening a URL."""

    short_url: str = Field(..., description="Host and path of the short link")

    model_config = {
        "json_schema_extra": {
            "examples": [{"short_url": "short.link/g/aB3dE5fG7hJ9kL1m"}]
        }
    }


class RedirectItem(BaseModel):
    """One stored short link."""

    key: str
    url: str
    redirect_count: int


class RedirectListResponse(BaseModel):
    """All stored short links."""

    urls: List[RedirectItem] = Field(default_factory=list)


class DeleteRedirectResponse(BaseModel):
    """Response after deleting a short link."""

    message: str


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
