#!/usr/bin/env python3
"""
paths.py
-------------------
Default locations for the rlist store, configuration and logs.

The layout under the user's home directory:
    ~/rlist/
    ├── rlist.sqlite   # The reading list store
    └── logs/          # Rotating operation and error logs

    <config dir>/rlist.yml   # Optional configuration file

Locations are computed on call rather than at import so that a changed
HOME (e.g. in tests) is honored.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path

DB_DIR_NAME = "rlist"
DB_FILE_NAME = "rlist.sqlite"
CONFIG_FILE_NAME = "rlist.yml"
LOG_DIR_NAME = "logs"


def default_data_dir() -> Path:
    """Directory holding the default store and logs (~/rlist)."""
    return Path.home() / DB_DIR_NAME


def default_db_path() -> Path:
    """Default reading list store (~/rlist/rlist.sqlite)."""
    return default_data_dir() / DB_FILE_NAME


def default_log_dir() -> Path:
    """Default log directory (~/rlist/logs)."""
    return default_data_dir() / LOG_DIR_NAME


def config_dir() -> Path:
    """
    Directory searched for the configuration file.

    Uses $XDG_CONFIG_HOME when set, ~/.config otherwise (macOS included).
    """
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg).expanduser()
    return Path.home() / ".config"


def default_config_path() -> Path:
    """Default configuration file (<config dir>/rlist.yml)."""
    return config_dir() / CONFIG_FILE_NAME
