"""Configuration management using pydantic-settings."""

import tempfile
import tomllib
from pathlib import Path
from typing import Self

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.models import MissingDatePolicy, WeekPolicy

DEFAULT_MARKER = "RD"
DEFAULT_EXTENSION = ".xml"
DEFAULT_WORKERS = 1
CONFIG_PATH = Path("~/.config/openmedia-minify/config.toml").expanduser()


class PathsConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OPENMEDIA_MINIFY_PATHS_")

    workspace_base: Path = Path(tempfile.gettempdir())
    schema_path: Path | None = None

    @field_validator("workspace_base", "schema_path", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path | None) -> Path | None:
        if v is None or v == "":
            return None
        return Path(v).expanduser()


class SelectionConfig(BaseSettings):
    """Which input entries are processed."""

    model_config = SettingsConfigDict(env_prefix="OPENMEDIA_MINIFY_SELECTION_")

    marker: str = DEFAULT_MARKER
    extension: str = DEFAULT_EXTENSION


class BatchConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OPENMEDIA_MINIFY_BATCH_")

    workers: int = DEFAULT_WORKERS
    week_policy: WeekPolicy = WeekPolicy.MODE
    missing_date: MissingDatePolicy = MissingDatePolicy.FAIL

    @field_validator("workers")
    @classmethod
    def positive_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError("workers must be at least 1")
        return v


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OPENMEDIA_MINIFY_", env_nested_delimiter="__")

    paths: PathsConfig = Field(default_factory=PathsConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)

    @model_validator(mode="after")
    def check_schema(self) -> Self:
        schema = self.paths.schema_path
        if schema is not None and not schema.is_file():
            raise ValueError(f"Schema file not found: {schema}")
        return self


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults."""
    path = config_path or CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        paths = PathsConfig(**data.get("paths", {}))
        selection = SelectionConfig(**data.get("selection", {}))
        batch = BatchConfig(**data.get("batch", {}))
        return Settings(paths=paths, selection=selection, batch=batch)

    return Settings()
