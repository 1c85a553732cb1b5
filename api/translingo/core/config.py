import logging
from functools import lru_cache

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # API settings
    DEBUG: bool = False
    PROJECT_NAME: str = "TransLingo"

    # Environment settings, declared before the fields whose validators read it
    ENVIRONMENT: str = "development"

    # CORS settings - accepts string or list, normalized to list[str] by validator
    CORS_ORIGINS: str | list[str] = "*"

    # Outbound HTTP settings shared by every provider call
    PROVIDER_TIMEOUT_SECONDS: float = 10.0
    HTTP_USER_AGENT: str = "Mozilla/5.0 (compatible; TransLingo/1.0)"

    # Translation providers, tried in this order
    GOOGLE_TRANSLATE_URL: str = "https://translate.googleapis.com/translate_a/single"
    LIBRETRANSLATE_URL: str = "https://libretranslate.com/translate"
    LIBRETRANSLATE_API_KEY: str = ""  # Optional, public instances may require one
    MYMEMORY_URL: str = "https://api.mymemory.translated.net/get"
    MYMEMORY_CONTACT_EMAIL: str = ""  # Sent as "de" to raise the free daily quota

    # Language detection (detectlanguage.com compatible)
    LANGUAGE_DETECTION_URL: str = "https://ws.detectlanguage.com/0.2/detect"
    LANGUAGE_DETECTION_API_KEY: str = ""  # Detection is skipped when empty

    # Translation history (in-memory)
    HISTORY_MAX_ENTRIES: int = 1000

    # Logging
    MAX_SAMPLE_LOG_LENGTH: int = 200  # Maximum length of user text to log

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Normalize CORS_ORIGINS to list of hosts.

        Accepts either a comma-separated string or a list of strings.
        Handles wildcards, trims whitespace, and ignores empty entries.
        """
        if isinstance(v, list):
            return [
                host.strip() for host in v if isinstance(host, str) and host.strip()
            ]

        if isinstance(v, str):
            if v.strip() == "*":
                return ["*"]
            return [host.strip() for host in v.split(",") if host.strip()]

        # Unexpected types deny all origins
        return []

    @field_validator(
        "GOOGLE_TRANSLATE_URL",
        "LIBRETRANSLATE_URL",
        "MYMEMORY_URL",
        "LANGUAGE_DETECTION_URL",
    )
    @classmethod
    def validate_provider_url(cls, v: str, info: ValidationInfo) -> str:
        """Ensure provider URLs are absolute http(s) URLs.

        Raises:
            ValueError: If the URL is empty or has no http(s) scheme
        """
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} must be non-empty")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"{info.field_name} must start with http:// or https://")
        return v

    @field_validator("PROVIDER_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("PROVIDER_TIMEOUT_SECONDS must be positive")
        return v

    @field_validator("HISTORY_MAX_ENTRIES")
    @classmethod
    def validate_history_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("HISTORY_MAX_ENTRIES must be at least 1")
        return v

    @classmethod
    def _is_production(cls, info: ValidationInfo) -> bool:
        """Check if ENVIRONMENT indicates production."""
        raw_env = info.data.get("ENVIRONMENT", "development")
        environment = str(raw_env).strip().lower()
        if environment in {"prod"}:
            environment = "production"
        return environment == "production"

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_in_production(cls, v: list[str], info) -> list[str]:
        """Reject wildcard CORS in production environments.

        Raises:
            ValueError: If wildcard CORS is used in production
        """
        if cls._is_production(info) and v == ["*"]:
            raise ValueError("CORS wildcard '*' not allowed in production")

        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings instance with lazy initialization.

    Settings are only created once on first access, then cached for subsequent calls.
    This prevents module-level side effects and allows testing without environment variables.

    Returns:
        Settings: Application settings object
    """
    return Settings()


def reset_settings() -> None:
    """Reset the cached settings instance.

    Useful for testing when you need to reload settings with different values.
    """
    get_settings.cache_clear()
