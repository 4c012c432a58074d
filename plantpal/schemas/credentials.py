"""
Pydantic schemas for the user-supplied API key endpoints.

The key value itself is write-only: no response model ever contains it.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class ApiKeyUpdateRequest(BaseModel):
    """Request to store the user's own Gemini API key."""
    api_key: str = Field(
        ...,
        description="Google AI Studio API key",
        min_length=10,
        max_length=200
    )

    @field_validator("api_key")
    @classmethod
    def strip_whitespace(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("api_key must not be blank")
        return value


class ApiKeyStatusResponse(BaseModel):
    """Which credential the pipeline will use."""
    has_user_api_key: bool
    has_default_api_key: bool
    active_source: Optional[Literal["user", "environment"]] = Field(
        None,
        description="Credential used for the next request, or null if none is available"
    )
