"""Application settings and configuration.

This module defines all configuration options for the Threads backend.
Settings are loaded from environment variables with sensible defaults and are
frozen once constructed; services receive the instance explicitly.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Threads API", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./threads.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Run the two profile queries on separate pooled sessions.
    parallel_profile_reads: bool = Field(default=True, alias="PARALLEL_PROFILE_READS")

    # Image storage
    image_storage_dir: str = Field(default="storage/images", alias="IMAGE_STORAGE_DIR")
    image_base_url: str = Field(
        default="http://localhost:8000/api/v1/images/",
        alias="IMAGE_BASE_URL",
    )
    max_image_size_bytes: int = Field(default=5 * 1024 * 1024, alias="MAX_IMAGE_SIZE_BYTES")

    # Listing defaults
    default_suggest_count: int = Field(default=4, alias="DEFAULT_SUGGEST_COUNT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        frozen=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()
