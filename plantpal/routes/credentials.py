"""
FastAPI routes for the user-supplied Gemini API key.

Used as the recovery path when /recommendations/query answers
QUOTA_EXCEEDED: the user enters their own key, then retries.

Endpoints:
- GET    /credentials/api-key: Which key will be used (never the key itself)
- PUT    /credentials/api-key: Store the user's key
- DELETE /credentials/api-key: Forget the user's key
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from plantpal.dependencies import get_credential_provider
from plantpal.schemas.credentials import ApiKeyStatusResponse, ApiKeyUpdateRequest
from plantpal.services.credentials import UserFirstCredentialProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/credentials", tags=["credentials"])


def _status(provider: UserFirstCredentialProvider) -> ApiKeyStatusResponse:
    return ApiKeyStatusResponse(
        has_user_api_key=provider.user_store.get_api_key() is not None,
        has_default_api_key=provider.fallback.get_api_key() is not None,
        active_source=provider.source(),
    )


@router.get(
    "/api-key",
    response_model=ApiKeyStatusResponse,
    summary="Show which API key is active",
)
async def get_api_key_status(
    provider: Annotated[UserFirstCredentialProvider, Depends(get_credential_provider)],
) -> ApiKeyStatusResponse:
    return _status(provider)


@router.put(
    "/api-key",
    response_model=ApiKeyStatusResponse,
    status_code=status.HTTP_200_OK,
    summary="Store the user's own API key",
)
async def set_api_key(
    request: ApiKeyUpdateRequest,
    provider: Annotated[UserFirstCredentialProvider, Depends(get_credential_provider)],
) -> ApiKeyStatusResponse:
    logger.info("PUT /credentials/api-key called")
    provider.user_store.set_api_key(request.api_key)
    return _status(provider)


@router.delete(
    "/api-key",
    response_model=ApiKeyStatusResponse,
    summary="Remove the user's own API key",
)
async def delete_api_key(
    provider: Annotated[UserFirstCredentialProvider, Depends(get_credential_provider)],
) -> ApiKeyStatusResponse:
    removed = provider.user_store.clear_api_key()
    logger.info(f"DELETE /credentials/api-key called (removed={removed})")
    return _status(provider)
