"""
Configuration module for the PlantPal backend.

Loads environment variables and validates required settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _split_csv(raw: str) -> List[str]:
    """Split a comma-separated env value, dropping blanks."""
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """Application settings loaded from environment variables."""

    # Google Gemini API (default credential, used when the user has not supplied one)
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")

    # Model fallback lists, tried in order
    GEMINI_TEXT_MODELS: List[str] = _split_csv(
        os.getenv("GEMINI_TEXT_MODELS", "gemini-2.5-flash,gemini-2.0-flash,gemini-1.5-flash")
    )
    GEMINI_IMAGE_MODELS: List[str] = _split_csv(
        os.getenv("GEMINI_IMAGE_MODELS", "imagen-3.0-generate-002,imagen-4.0-generate-001")
    )

    # Rate-limit avoidance
    MODEL_FALLBACK_DELAY_SECONDS: float = float(os.getenv("MODEL_FALLBACK_DELAY_SECONDS", "1.0"))
    IMAGE_REQUEST_DELAY_SECONDS: float = float(os.getenv("IMAGE_REQUEST_DELAY_SECONDS", "1.5"))

    # Local persistent slot for a user-supplied API key
    CREDENTIAL_STORE_PATH: str = os.getenv("CREDENTIAL_STORE_PATH", ".plantpal/credentials.json")

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings (production only, comma-separated)
    CORS_ALLOWED_ORIGINS: List[str] = _split_csv(os.getenv("CORS_ALLOWED_ORIGINS", ""))

    @classmethod
    def validate(cls) -> None:
        """
        Validate that the pipeline settings are usable.

        GOOGLE_API_KEY is not required here: users may supply their own key
        at runtime through the credentials endpoint.

        Raises:
            ValueError: If any setting is missing or out of range.
        """
        problems = []

        if not cls.GEMINI_TEXT_MODELS:
            problems.append("GEMINI_TEXT_MODELS must list at least one model")
        if not cls.GEMINI_IMAGE_MODELS:
            problems.append("GEMINI_IMAGE_MODELS must list at least one model")
        if cls.MODEL_FALLBACK_DELAY_SECONDS < 0:
            problems.append("MODEL_FALLBACK_DELAY_SECONDS must not be negative")
        if cls.IMAGE_REQUEST_DELAY_SECONDS < 0:
            problems.append("IMAGE_REQUEST_DELAY_SECONDS must not be negative")

        if problems:
            raise ValueError(
                f"Invalid configuration: {'; '.join(problems)}. "
                "Please check your .env file."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"⚠️  Warning: {e}")
            print("   The app may not work correctly until you configure your .env file.")
        else:
            raise
