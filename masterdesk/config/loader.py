"""Locating and layering the TOML files behind ``Settings``.

A deployment ships ``config/default.toml`` and may add an overlay named
after the environment (``config/production.toml``). Overlays are merged
section by section, so an overlay that only sets
``[forms.product] min_price`` keeps every other product rule.
"""

import os
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

CONFIG_DIR_VAR = "MASTERDESK_CONFIG_DIR"
ENVIRONMENT_VAR = "MASTERDESK_ENV"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_FILE = "default.toml"

# How many parent directories are searched for a config/ folder
SEARCH_DEPTH = 5


def get_config_dir() -> Path:
    """Directory holding the TOML files.

    ``MASTERDESK_CONFIG_DIR`` wins; otherwise the nearest ``config/`` folder
    at or above the working directory is used.

    Raises:
        FileNotFoundError: If ``MASTERDESK_CONFIG_DIR`` names a missing directory
    """
    override = os.environ.get(CONFIG_DIR_VAR)
    if override:
        path = Path(override)
        if not path.is_dir():
            raise FileNotFoundError(f"{CONFIG_DIR_VAR} points to a missing directory: {path}")
        return path

    cwd = Path.cwd()
    for base in [cwd, *cwd.parents][:SEARCH_DEPTH]:
        candidate = base / "config"
        if candidate.is_dir():
            return candidate
    return Path("config")


def get_environment() -> str:
    return os.environ.get(ENVIRONMENT_VAR, DEFAULT_ENVIRONMENT)


def config_files(config_dir: Path | None = None, environment: str | None = None) -> list[Path]:
    """The files to layer, lowest priority first.

    Raises:
        FileNotFoundError: If the directory has no ``default.toml``
    """
    config_dir = config_dir or get_config_dir()
    environment = environment or get_environment()

    default = config_dir / DEFAULT_FILE
    if not default.is_file():
        raise FileNotFoundError(
            f"{DEFAULT_FILE} not found in {config_dir}; set {CONFIG_DIR_VAR} to the config folder"
        )

    files = [default]
    overlay = config_dir / f"{environment}.toml"
    if overlay.is_file() and overlay != default:
        files.append(overlay)
    return files


def load_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``, recursing into tables."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def read_layers(files: Iterable[Path]) -> dict[str, Any]:
    """Load ``files`` in order and merge each over the previous ones."""
    merged: dict[str, Any] = {}
    for path in files:
        merged = deep_merge(merged, load_toml(path))
    return merged
