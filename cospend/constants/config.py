"""Configuration-related constants and paths.

This module contains the directory names, file names and cache settings
used throughout the application. Directory lookups are functions rather
than module constants so that environment overrides (XDG_*) are honoured
at call time.
"""
import os
import sys
from datetime import timedelta
from pathlib import Path

APP_NAME = "cospend"

# Cached project/user-info entries older than this are ignored
CACHE_TTL = timedelta(hours=1)

# Singleton cache key for the authenticated user's info
USER_INFO_CACHE_KEY = "_userinfo"

# Config file stem and supported extensions, in order of preference
CONFIG_FILE_STEM = APP_NAME
CONFIG_EXTENSIONS = [".json", ".yaml", ".yml", ".toml"]

# Directory permissions for cache and config directories
CACHE_DIR_MODE = 0o700
CONFIG_DIR_MODE = 0o700
CACHE_FILE_MODE = 0o644
CONFIG_FILE_MODE = 0o600


def get_cache_home() -> Path:
    """Return the cache root, checking XDG_CACHE_HOME first."""
    override = os.getenv("XDG_CACHE_HOME")
    if override:
        return Path(override)
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Caches"
    if sys.platform == "win32":
        local_app_data = os.getenv("LOCALAPPDATA")
        return Path(local_app_data) if local_app_data else home / "AppData" / "Local"
    return home / ".cache"


def get_config_home() -> Path:
    """Return the config root, checking XDG_CONFIG_HOME first."""
    override = os.getenv("XDG_CONFIG_HOME")
    if override:
        return Path(override)
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support"
    if sys.platform == "win32":
        app_data = os.getenv("APPDATA")
        return Path(app_data) if app_data else home / "AppData" / "Roaming"
    return home / ".config"


def get_cache_dir() -> Path:
    """Application cache directory (not created here)."""
    return get_cache_home() / APP_NAME


def get_config_dir() -> Path:
    """Primary application config directory (used for saving)."""
    return get_config_home() / APP_NAME
