"""
FastAPI dependency functions.

Routes receive their credential provider through Depends(...) so tests can
swap it with app.dependency_overrides instead of touching the real store.
"""

from plantpal.config import settings
from plantpal.services.credentials import (
    EnvironmentCredentialProvider,
    LocalCredentialStore,
    UserFirstCredentialProvider,
)


def get_credential_store() -> LocalCredentialStore:
    """Local persistent slot for the user-supplied API key."""
    return LocalCredentialStore(settings.CREDENTIAL_STORE_PATH)


def get_credential_provider() -> UserFirstCredentialProvider:
    """
    Provider used by the recommendation endpoints.

    The user-supplied key wins; GOOGLE_API_KEY is the fallback.
    """
    return UserFirstCredentialProvider(
        user_store=get_credential_store(),
        fallback=EnvironmentCredentialProvider(settings.GOOGLE_API_KEY),
    )
