"""Where gymsupply keeps its local database and HTTP cache."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "gymsupply"
DATABASE_FILENAME: Final[str] = "catalog.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Local data directory; files inside it are created on first use."""

    data_dir: Path

    def _file(self, filename: str, *, ensure: bool) -> Path:
        directory = self.data_dir.expanduser().resolve()
        if ensure:
            directory.mkdir(parents=True, exist_ok=True)
        return directory / filename

    def database_path(self, *, ensure: bool = True) -> Path:
        return self._file(DATABASE_FILENAME, ensure=ensure)

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        return self._file(HTTP_CACHE_FILENAME, ensure=ensure)

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = optional_env_var("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = optional_env_var("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    override = optional_env_var("GYMSUPPLY_DATA_DIR")
    return StorageConfig(
        data_dir=Path(override) if override else _platform_data_home() / APP_DIR_NAME
    )


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Use ``DATABASE_URI`` when set, otherwise a SQLite file in the data directory."""

    uri = optional_env_var("DATABASE_URI")
    if uri:
        return DatabaseConfig(uri=uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())
