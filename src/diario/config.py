"""Settings loaded from DIARIO_* environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .data.codec import Layout
from .logs import get_logger

log = get_logger("config")

ENV_PREFIX = "DIARIO"

DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "diario" / "data"
DEFAULT_STORE_FILE = "store.yml"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_layout(name: str, default: Layout) -> Layout:
    raw = _env(name, default.value).lower()
    try:
        return Layout(raw)
    except ValueError:
        log.warning(f"Unknown layout {raw!r} in {name}, using {default.value}")
        return default


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    store_file: str
    layout: Layout

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.store_file

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            data_dir=_env_path(_k("DATA_DIR"), DEFAULT_DATA_DIR),
            store_file=_env(_k("STORE_FILE"), DEFAULT_STORE_FILE),
            layout=_env_layout(_k("LAYOUT"), Layout.SECTIONS),
        )


def get_settings() -> Settings:
    return Settings.from_env()
