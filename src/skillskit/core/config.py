"""Configuration management for the Box Skills kit."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    ENV: str = "local"
    SERVICE_NAME: str = "skillskit"
    SERVICE_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Box API Configuration
    BOX_API_BASE: str = "https://api.box.com/2.0"
    REQUEST_TIMEOUT: float = 60.0  # seconds for content and metadata calls
    BASIC_FORMAT_TIMEOUT: float = 120.0  # representation lookups can be slow
    STREAM_CHUNK_SIZE: int = 64 * 1024

    # File classification
    STRICT_FILE_TYPES: bool = False  # UNKNOWN instead of IMAGE for unmatched formats

    # Metadata write-back
    METADATA_TEMPLATE: str = "boxSkillsCards"

    @property
    def api_base(self) -> str:
        """BOX_API_BASE without a trailing slash."""
        return self.BOX_API_BASE.rstrip("/")


# Singleton settings instance
settings = Settings()
