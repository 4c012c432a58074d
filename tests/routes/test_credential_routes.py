"""
Tests for the /credentials/api-key endpoints.

The key value must never appear in any response body.
"""

import pytest
from fastapi.testclient import TestClient

from plantpal.dependencies import get_credential_provider
from plantpal.main import app
from plantpal.services.credentials import (
    EnvironmentCredentialProvider,
    LocalCredentialStore,
    UserFirstCredentialProvider,
)

USER_KEY = "AIzaUserSuppliedKey123456"


@pytest.fixture
def client():
    return TestClient(app)


def _install_provider(tmp_path, default_key):
    provider = UserFirstCredentialProvider(
        user_store=LocalCredentialStore(str(tmp_path / "credentials.json")),
        fallback=EnvironmentCredentialProvider(default_key),
    )
    app.dependency_overrides[get_credential_provider] = lambda: provider
    return provider


@pytest.fixture
def provider(tmp_path):
    yield _install_provider(tmp_path, "test-google-api-key")
    app.dependency_overrides.clear()


@pytest.fixture
def provider_without_default(tmp_path):
    yield _install_provider(tmp_path, "")
    app.dependency_overrides.clear()


class TestApiKeyStatus:

    def test_environment_key_active(self, client, provider):
        response = client.get("/credentials/api-key")

        assert response.status_code == 200
        assert response.json() == {
            "has_user_api_key": False,
            "has_default_api_key": True,
            "active_source": "environment",
        }

    def test_no_key_available(self, client, provider_without_default):
        response = client.get("/credentials/api-key")

        assert response.json()["active_source"] is None


class TestSetApiKey:

    def test_user_key_takes_over(self, client, provider):
        response = client.put("/credentials/api-key", json={"api_key": f"  {USER_KEY}  "})

        assert response.status_code == 200
        data = response.json()
        assert data["has_user_api_key"] is True
        assert data["active_source"] == "user"
        assert USER_KEY not in response.text
        assert provider.get_api_key() == USER_KEY

    def test_short_key_rejected(self, client, provider):
        response = client.put("/credentials/api-key", json={"api_key": "short"})

        assert response.status_code == 422
        assert provider.user_store.get_api_key() is None

    def test_blank_key_rejected(self, client, provider):
        response = client.put("/credentials/api-key", json={"api_key": " " * 20})

        assert response.status_code == 422

    def test_key_not_echoed_in_validation_error(self, client, provider):
        secret = "x" * 250

        response = client.put("/credentials/api-key", json={"api_key": secret})

        assert response.status_code == 422
        assert secret not in response.text


class TestDeleteApiKey:

    def test_delete_restores_default(self, client, provider):
        client.put("/credentials/api-key", json={"api_key": USER_KEY})

        response = client.delete("/credentials/api-key")

        assert response.status_code == 200
        assert response.json()["active_source"] == "environment"
        assert provider.user_store.get_api_key() is None

    def test_delete_without_key_is_harmless(self, client, provider_without_default):
        response = client.delete("/credentials/api-key")

        assert response.status_code == 200
        assert response.json()["has_user_api_key"] is False
