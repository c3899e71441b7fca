"""Application configuration management."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    log_level: str = Field(default="INFO", alias="IMGHASH_LOG_LEVEL")

    # Hash defaults (used when no explicit HashConfig is passed)
    hash_algorithm: str = Field(
        default="perceptual",
        pattern="^(average|median|difference|perceptual)$",
        alias="IMGHASH_ALGORITHM",
        description="Default hashing algorithm",
    )
    hash_width: int = Field(
        default=8,
        ge=1,
        alias="IMGHASH_WIDTH",
        description="Width of the resulting bit matrix",
    )
    hash_height: int = Field(
        default=8,
        ge=1,
        alias="IMGHASH_HEIGHT",
        description="Height of the resulting bit matrix",
    )
    hash_factor: int = Field(
        default=4,
        ge=1,
        alias="IMGHASH_FACTOR",
        description="Upscale factor applied before the perceptual hash DCT",
    )
    hash_color_space: str = Field(
        default="rec601",
        pattern="^(rec601|rec709)$",
        alias="IMGHASH_COLOR_SPACE",
        description="Grayscale weighting (rec601 or rec709)",
    )

    # Batch hashing
    hash_max_workers: int = Field(
        default=4,
        ge=1,
        le=64,
        alias="IMGHASH_MAX_WORKERS",
        description="Thread pool size for batch hashing",
    )

    # Comparison
    similarity_threshold: int = Field(
        default=5,
        ge=0,
        alias="IMGHASH_SIMILARITY_THRESHOLD",
        description="Maximum Hamming distance for two hashes to count as similar",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
