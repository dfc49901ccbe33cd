"""Configuration management for World Wiki."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WIKI_",
    )

    # Paths
    data_dir: Path = Field(default=Path("data"))

    # Linking
    min_link_length: int = Field(default=3, description="Shortest name the auto-linker will wrap")

    # Search
    search_cutoff: float = Field(default=60.0, description="Minimum fuzzy score for a search hit")
    search_limit: int = Field(default=10, description="Maximum search results")

    # CLI
    log_level: str = Field(default="WARNING")

    @property
    def world_path(self) -> Path:
        return self.data_dir / "world.json"

    @property
    def chronicles_path(self) -> Path:
        return self.data_dir / "chronicles.json"

    @property
    def static_pages_path(self) -> Path:
        return self.data_dir / "static_pages.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
