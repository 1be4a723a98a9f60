from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class ConfigError(Exception):
    pass


def env_str(name: str, default: str | None = None) -> str:
    val = os.getenv(name)
    return val if val is not None else (default or "")


def env_int(name: str, default: int) -> int:
    try:
        return int(env_str(name, str(default)))
    except ValueError:
        return default


LOG_LEVEL: str = env_str("WAIFURARY_LOG_LEVEL", "INFO").upper()
HOST: str = env_str("WAIFURARY_HOST", "127.0.0.1")
PORT: int = env_int("WAIFURARY_PORT", 8000)
CORS_ORIGINS: list[str] = [
    o.strip()
    for o in env_str(
        "WAIFURARY_CORS_ORIGINS", "http://localhost:1420,http://127.0.0.1:1420"
    ).split(",")
    if o.strip()
]

IMAGES_DIRNAME = "images"
METADATA_DIRNAME = "metadata"


def home_dir() -> Path:
    override = env_str("WAIFURARY_HOME")
    if override:
        return Path(override)
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise ConfigError("Failed to get home directory") from e


def data_root() -> Path:
    """Return the configured data root, defaulting to ~/.config/waifurary."""
    root = env_str("WAIFURARY_ROOT")
    if root:
        return Path(root)
    return home_dir() / ".config" / "waifurary"


@dataclass(frozen=True)
class AppPaths:
    images_root: Path
    metadata_root: Path

    @classmethod
    def from_root(cls, root: Path | str) -> "AppPaths":
        root = Path(root)
        return cls(
            images_root=root / IMAGES_DIRNAME,
            metadata_root=root / METADATA_DIRNAME,
        )

    @classmethod
    def resolve(cls) -> "AppPaths":
        return cls.from_root(data_root())
