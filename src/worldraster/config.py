"""worldraster configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
and .env files.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    """Raised when a configuration value is unusable for an operation.

    Example:
        >>> Settings(TRANSFORM_WORKERS=0, _env_file=None).require_workers()
        Traceback (most recent call last):
        ...
        ConfigError: Transform worker count must be >= 1, got 0. Set it in .env
        file or TRANSFORM_WORKERS environment variable.
    """

    def __init__(self, key_name: str, env_var: str, detail: str) -> None:
        """Initialize configuration error.

        Args:
            key_name: Human-readable name of the offending key.
            env_var: Environment variable name to set.
            detail: What is wrong with the current value.
        """
        self.key_name = key_name
        self.env_var = env_var
        self.detail = detail
        message = (
            f"{key_name} {detail}. "
            f"Set it in .env file or {env_var} environment variable."
        )
        super().__init__(message)


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Elementwise transform
    TRANSFORM_WORKERS: int = 1  # 1 = run in the calling thread
    TRANSFORM_MIN_ROWS_PER_BAND: int = 32  # Smallest row band handed to a worker

    # Text rendering
    DEFAULT_FONT: str = "DejaVuSans.ttf"
    DEFAULT_FONT_SIZE: int = 12
    STRICT_FONT_CHECK: bool = False

    def require_workers(self) -> int:
        """Get the transform worker count, raising ConfigError if invalid.

        Returns:
            The configured number of transform workers.

        Raises:
            ConfigError: If TRANSFORM_WORKERS is less than 1.
        """
        if self.TRANSFORM_WORKERS < 1:
            raise ConfigError(
                "Transform worker count",
                "TRANSFORM_WORKERS",
                f"must be >= 1, got {self.TRANSFORM_WORKERS}",
            )
        return self.TRANSFORM_WORKERS

    def require_band_rows(self) -> int:
        """Get the minimum rows per worker band, raising ConfigError if invalid.

        Returns:
            The configured minimum band height in rows.

        Raises:
            ConfigError: If TRANSFORM_MIN_ROWS_PER_BAND is less than 1.
        """
        if self.TRANSFORM_MIN_ROWS_PER_BAND < 1:
            raise ConfigError(
                "Minimum rows per band",
                "TRANSFORM_MIN_ROWS_PER_BAND",
                f"must be >= 1, got {self.TRANSFORM_MIN_ROWS_PER_BAND}",
            )
        return self.TRANSFORM_MIN_ROWS_PER_BAND


# Singleton instance for import convenience
settings = Settings()
