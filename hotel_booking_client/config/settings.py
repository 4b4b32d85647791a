"""
Settings and configuration management for the hotel booking client.

Provides environment-based configuration management using Pydantic settings
for the backend API endpoint, HTTP client behaviour, pricing and logging.
"""

from pathlib import Path

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Configuration settings for the hotel booking client.

    Uses environment variables with HOTEL_ prefix for configuration.
    """

    # API Configuration
    api_base_url: str = Field(
        "http://localhost:3000/api", description="Base URL for the booking backend API"
    )
    environment: str = Field(
        "production",
        description="Deployment environment (production/staging/development)",
    )

    # Client Configuration
    request_timeout: int = Field(
        30, description="HTTP request timeout in seconds", ge=1, le=300
    )
    max_retries: int = Field(
        3, description="Maximum attempts used by the with_retry helper", ge=1, le=10
    )
    retry_backoff: float = Field(
        1.0, description="Base retry backoff time in seconds", ge=0.0, le=60.0
    )

    # Pricing Configuration
    tax_rate: float = Field(0.10, description="Tax rate applied to room prices", ge=0.0)
    default_currency: str = Field("USD", description="Currency used for empty carts")

    # Session Configuration
    token_refresh_interval: float = Field(
        45 * 60,
        description="Seconds between background access token refreshes",
        gt=0,
    )
    storage_path: str | None = Field(
        None,
        description="File backing the local key-value store (defaults to ~/.hotel_booking_client/storage.json)",
    )
    clear_cart_on_logout: bool = Field(
        False, description="Empty the cart when the user logs out"
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format string",
    )
    enable_structured_logging: bool = Field(
        False, description="Enable structured logging with JSON format"
    )

    model_config = ConfigDict(
        env_file=".env", env_prefix="HOTEL_", case_sensitive=False, extra="ignore"
    )

    def get_storage_path(self) -> Path:
        """Resolve the file used by the persistent key-value store."""
        if self.storage_path:
            return Path(self.storage_path).expanduser()
        return Path.home() / ".hotel_booking_client" / "storage.json"

    def validate_required_settings(self) -> list[str]:
        """
        Validate that all required settings are present.

        Returns:
            List of missing settings (empty if all present)
        """
        missing = []

        if not self.api_base_url:
            missing.append("HOTEL_API_BASE_URL")

        return missing


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
