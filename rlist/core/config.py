#!/usr/bin/env python3
"""
config.py
--------------------
Configuration loading for rlist.

The configuration file is optional YAML with two optional keys:

    db_file: /absolute/path/to/rlist.sqlite
    datetime_format: "%d %b %Y, %H:%M"

Lookup order:
    1. Explicit path (``--config``); must exist
    2. Default path (<config dir>/rlist.yml) if it exists
    3. Built-in defaults

Usage:
    from rlist.core.config import load_config

    config = load_config()
    db = ReadingListDB(config.db_file)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from .exceptions import ConfigError
from .logging_manager import RlistLogger, safe_logger
from .paths import default_config_path, default_db_path
from .validators import TIMESTAMP_FORMAT

DEFAULT_DATETIME_FORMAT = TIMESTAMP_FORMAT


@dataclass
class RlistConfig:
    """
    Resolved configuration.

    Attributes:
        db_file: Absolute path of the reading list store
        datetime_format: strftime format used to display entry timestamps
    """

    db_file: Path = field(default_factory=default_db_path)
    datetime_format: str = DEFAULT_DATETIME_FORMAT


def datetime_format_is_valid(fmt: str) -> bool:
    """
    Check that a strftime format renders.

    A valid format must contain at least one directive and render
    without raising.
    """
    if not isinstance(fmt, str) or "%" not in fmt:
        return False
    try:
        datetime(2000, 1, 31, 12, 30, 45).strftime(fmt)
    except (ValueError, TypeError):
        return False
    return True


def config_from_content(
    content: Optional[Dict[str, Any]],
    source: Optional[Path] = None,
    logger: Optional[RlistLogger] = None,
) -> RlistConfig:
    """
    Build a config from parsed YAML content.

    Args:
        content: Mapping read from the config file (None for empty files)
        source: File the content came from, for error messages
        logger: Optional logger for warnings

    Returns:
        Resolved RlistConfig

    Raises:
        ConfigError: If content is not a mapping or db_file is relative
    """
    if content is None:
        content = {}
    if not isinstance(content, dict):
        raise ConfigError(f"Config file {source} must contain a YAML mapping")

    config = RlistConfig()

    fmt = content.get("datetime_format")
    if fmt is not None:
        if datetime_format_is_valid(fmt):
            config.datetime_format = fmt
        else:
            safe_logger(logger).log_warning(
                f"The datetime format {fmt!r} in your config is not a valid "
                f"strftime format, reverting to {DEFAULT_DATETIME_FORMAT!r}"
            )

    db_file = content.get("db_file")
    if db_file is not None:
        path = Path(str(db_file)).expanduser()
        if not path.is_absolute():
            raise ConfigError(
                "The db_file config option must contain an absolute path "
                "to the desired reading list location"
            )
        config.db_file = path

    return config


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    logger: Optional[RlistLogger] = None,
) -> RlistConfig:
    """
    Load configuration from an explicit or the default location.

    Args:
        config_path: Explicit config file; must exist when given
        logger: Optional logger

    Returns:
        Resolved RlistConfig (defaults when no file is found)

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    if config_path is not None:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Could not read rlist config file: {path}")
    else:
        path = default_config_path()
        if not path.is_file():
            safe_logger(logger).log_debug(
                "No config file found, using defaults", {"looked_at": str(path)}
            )
            return RlistConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read rlist config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in rlist config file {path}: {e}") from e

    safe_logger(logger).log_debug("Loaded config file", {"path": str(path)})
    return config_from_content(content, source=path, logger=logger)
