"""Runtime settings.

Read from an optional YAML file plus environment variables:

  FLEXIO_CONFIG     path to a YAML file with data_dir / languages / log_level
  FLEXIO_DATA_DIR   directory holding <language>.yml rule tables
  FLEXIO_LANGUAGES  comma-separated language ids to enable (default: all)
  FLEXIO_LOG_LEVEL  logging level name (default: WARNING)

Environment variables win over the file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import yaml

from flexio.errors import ConfigurationError

PACKAGED_DATA_DIR: Path = Path(__file__).parent / "morphology" / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = PACKAGED_DATA_DIR
    languages: tuple[str, ...] | None = None
    log_level: str = "WARNING"


def _split_languages(value) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ConfigurationError(f"languages must be a list or a comma-separated string, got {value!r}")
    langs = tuple(str(item).strip() for item in items if str(item).strip())
    return langs or None


def _read_file(path: Path) -> dict:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"invalid YAML in config file {path}: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"config file {path} must contain a mapping")
    unknown = set(raw) - {"data_dir", "languages", "log_level"}
    if unknown:
        raise ConfigurationError(f"unknown keys in config file {path}: {', '.join(sorted(unknown))}")
    return raw


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from FLEXIO_CONFIG and the FLEXIO_* environment variables."""
    env = os.environ if environ is None else environ

    cfg: dict = {}
    config_path = env.get("FLEXIO_CONFIG")
    if config_path:
        cfg = _read_file(Path(config_path))

    data_dir = env.get("FLEXIO_DATA_DIR") or cfg.get("data_dir")
    languages = env.get("FLEXIO_LANGUAGES") or cfg.get("languages")
    log_level = (env.get("FLEXIO_LOG_LEVEL") or cfg.get("log_level") or "WARNING").upper()

    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"unknown log level: {log_level}")

    return Settings(
        data_dir=Path(data_dir) if data_dir else PACKAGED_DATA_DIR,
        languages=_split_languages(languages),
        log_level=log_level,
    )
