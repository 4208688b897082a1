"""Runtime settings, read from the environment (``JIGSAW_*``) or a ``.env`` file."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Default parameters for puzzle batches."""

    # Grid settings
    LENGTH: int = Field(default=5, ge=1, description="Number of columns")
    HEIGHT: int = Field(default=5, ge=1, description="Number of rows")
    MAX_SHAPES: int = Field(default=10, ge=1, description="Number of distinct connector shape ids")

    # Batch settings
    TOTAL_PUZZLES: int = Field(default=1000, ge=1, description="Puzzles generated per batch")
    MAX_SOLUTIONS: Optional[int] = Field(default=None, ge=1, description="Solution cap per puzzle, None for no cap")
    SEED: Optional[int] = None

    # Output settings
    LOG_LEVEL: str = "WARNING"
    SHOW_PROGRESS: bool = True

    class Config:
        """Pydantic configuration class."""

        case_sensitive = True
        env_file = ".env"
        env_prefix = "JIGSAW_"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
