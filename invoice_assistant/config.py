"""
Configuration module for the Invoice Assistant backend.

Loads environment variables and validates required settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # QuickBooks OAuth application credentials
    QUICKBOOKS_CLIENT_ID: str = os.getenv("QUICKBOOKS_CLIENT_ID", "")
    QUICKBOOKS_CLIENT_SECRET: str = os.getenv("QUICKBOOKS_CLIENT_SECRET", "")

    # Public base URL of this service (used to build the OAuth redirect URI)
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")

    # Static anti-forgery token sent as the OAuth `state` parameter
    OAUTH_STATE: str = os.getenv("OAUTH_STATE", "invoice-assistant")

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Delay in seconds after each streamed chat fragment
    CHAT_STREAM_DELAY: float = float(os.getenv("CHAT_STREAM_DELAY", "0.05"))

    # CORS Settings
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    @property
    def QUICKBOOKS_REDIRECT_URI(self) -> str:
        """OAuth callback URL registered with Intuit."""
        explicit = os.getenv("QUICKBOOKS_REDIRECT_URI", "")
        if explicit:
            return explicit
        return f"{self.BASE_URL.rstrip('/')}/api/auth/callback"

    @property
    def QUICKBOOKS_ENVIRONMENT(self) -> str:
        """QuickBooks environment: 'production' only when the app runs in production."""
        return "production" if self.is_production() else "sandbox"

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing.
        """
        required_settings = {
            "QUICKBOOKS_CLIENT_ID": cls.QUICKBOOKS_CLIENT_ID,
            "QUICKBOOKS_CLIENT_SECRET": cls.QUICKBOOKS_CLIENT_SECRET,
        }

        missing = [key for key, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
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
        # In development the app still serves mock data, so warn but don't crash
        if settings.is_development():
            print(f"⚠️  Warning: {e}")
            print("   QuickBooks connect will not work until you configure your .env file.")
        else:
            raise
