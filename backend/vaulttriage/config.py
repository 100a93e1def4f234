"""Configuration management using Pydantic Settings"""

from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Vault Configuration ===
    vault_path: Path | None = Field(
        default=None,
        description="Default vault used by the CLI when no path is given"
    )
    note_extension: str = Field(
        default=".md",
        description="File extension that marks a note"
    )
    obsidian_dir_name: str = Field(
        default=".obsidian",
        description="Config directory whose presence marks a vault"
    )

    # === Cache Configuration ===
    cache_dir_name: str = Field(
        default=".vault-triage",
        description="Reserved directory inside the vault for tool state"
    )
    cache_file_name: str = Field(
        default="scan-cache.json",
        description="Scan cache file name within the cache directory"
    )

    def cache_path(self, vault_root: Path) -> Path:
        return vault_root / self.cache_dir_name / self.cache_file_name

    # === Server Configuration ===
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3001)
    cors_origins: list[str] = Field(default=["*"])
    log_level: str = Field(default="INFO")


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings singleton"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings"""
    global _settings
    _settings = Settings()
    return _settings
