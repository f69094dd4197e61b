"""Configuration management using pydantic-settings."""

import tomllib
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PATTERNS = ["*.pdf"]
DEFAULT_MAX_FILE_SIZE_MB = 100
DEFAULT_MAX_FILENAME_LENGTH = 255
CONFIG_PATH = Path("~/.config/depotfiler/config.toml").expanduser()


class RenameConfig(BaseSettings):
    """Batch renaming options."""

    recursive: bool = True
    dry_run: bool = False
    patterns: list[str] = DEFAULT_PATTERNS
    max_file_size_mb: int = DEFAULT_MAX_FILE_SIZE_MB
    max_filename_length: int = DEFAULT_MAX_FILENAME_LENGTH

    @field_validator("max_file_size_mb", "max_filename_length")
    @classmethod
    def positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @property
    def max_file_size(self) -> int:
        return self.max_file_size_mb * 1_000_000


class MetadataConfig(BaseSettings):
    write_sidecar: bool = False
    update_pdf: bool = False

    @property
    def enabled(self) -> bool:
        return self.write_sidecar or self.update_pdf


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DEPOTFILER_")

    rename: RenameConfig = RenameConfig()
    metadata: MetadataConfig = MetadataConfig()


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults."""
    path = config_path or CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        rename = RenameConfig(**data.get("rename", {}))
        metadata = MetadataConfig(**data.get("metadata", {}))
        return Settings(rename=rename, metadata=metadata)

    return Settings()
