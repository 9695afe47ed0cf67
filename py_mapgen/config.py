"""Configuration management."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings pulled from environment variables or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="MAPGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="console", description="Logging format (console or json)")

    # Generation defaults
    default_metric: str = Field(default="euclidean", description="Metric used when none is given")
    default_relax_iterations: int = Field(
        default=2, ge=0, description="Lloyd relaxation steps when none are given"
    )
    max_grid_cells: int = Field(
        default=16_000_000, gt=0, description="Largest grid (width * height) accepted"
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("console", "json"):
            raise ValueError(f"log_format must be 'console' or 'json', got {value!r}")
        return value


settings = Settings()
