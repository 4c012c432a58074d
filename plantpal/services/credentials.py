"""
API key providers for the Gemini client.

The pipeline never reads a global key slot directly; it is handed a
CredentialProvider. The standard wiring is:

    UserFirstCredentialProvider(
        user_store=LocalCredentialStore(settings.CREDENTIAL_STORE_PATH),
        fallback=EnvironmentCredentialProvider(settings.GOOGLE_API_KEY),
    )

i.e. a key the user supplied (persisted in a local JSON file under a fixed
key) wins; otherwise the deployment's GOOGLE_API_KEY is used.

Writes to the local store are expected to come from a single writer
(the credentials endpoint); the store does not lock the file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from google import genai

from plantpal.services.errors import ConfigurationError
from plantpal.utils.constants import USER_API_KEY_STORAGE_KEY
from plantpal.utils.logging import mask_secret

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    def get_api_key(self) -> Optional[str]:
        ...


class EnvironmentCredentialProvider:
    """Deployment default key, captured once at construction."""

    def __init__(self, api_key: Optional[str] = None):
        if api_key is None:
            api_key = os.getenv("GOOGLE_API_KEY", "")
        self._api_key = api_key.strip() or None

    def get_api_key(self) -> Optional[str]:
        return self._api_key


class LocalCredentialStore:
    """
    One optional user-supplied key in a local JSON key/value file.

    A missing or unreadable file reads as "no key".
    """

    def __init__(self, path: str, key: str = USER_API_KEY_STORAGE_KEY):
        self.path = Path(path)
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable credential store {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get_api_key(self) -> Optional[str]:
        value = self._read().get(self.key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    def set_api_key(self, api_key: str) -> None:
        api_key = api_key.strip()
        if not api_key:
            raise ValueError("api_key must not be blank")
        data = self._read()
        data[self.key] = api_key
        self._write(data)
        logger.info(f"Stored user API key {mask_secret(api_key)}")

    def clear_api_key(self) -> bool:
        """Remove the stored key. Returns True if one was present."""
        data = self._read()
        if self.key not in data:
            return False
        del data[self.key]
        self._write(data)
        logger.info("Cleared user API key")
        return True


class UserFirstCredentialProvider:
    """User-supplied key if present, otherwise the fallback provider's key."""

    def __init__(self, user_store: LocalCredentialStore, fallback: CredentialProvider):
        self.user_store = user_store
        self.fallback = fallback

    def get_api_key(self) -> Optional[str]:
        return self.user_store.get_api_key() or self.fallback.get_api_key()

    def source(self) -> Optional[str]:
        """Which provider would supply the key: 'user', 'environment' or None."""
        if self.user_store.get_api_key():
            return "user"
        if self.fallback.get_api_key():
            return "environment"
        return None


def resolve_api_key(provider: CredentialProvider) -> str:
    """
    Get a usable API key.

    Raises:
        ConfigurationError: If the provider has no key at all
    """
    api_key = provider.get_api_key()
    if not api_key:
        raise ConfigurationError(
            "No Gemini API key available. Set GOOGLE_API_KEY in your .env file "
            "or supply your own key via PUT /credentials/api-key."
        )
    return api_key


def build_gemini_client(provider: CredentialProvider) -> genai.Client:
    """Create a Gemini client from the provider's current key."""
    api_key = resolve_api_key(provider)
    client = genai.Client(api_key=api_key)
    logger.info("Gemini client initialized")
    return client
