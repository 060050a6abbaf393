"""Nextcloud connection settings.

Settings come from a config file (JSON, YAML or TOML) in the user's config
directory, overridden field-by-field by the NEXTCLOUD_DOMAIN,
NEXTCLOUD_USER and NEXTCLOUD_PASSWORD environment variables.
"""

# Standard library
import json
import os
import tomllib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List, Optional

# Third-party
import tomli_w
import yaml

# Local application
from cospend.common.env import get_env
from cospend.common.utils import LOG, mkdir_p
from cospend.constants.config import (
    APP_NAME,
    CONFIG_DIR_MODE,
    CONFIG_EXTENSIONS,
    CONFIG_FILE_MODE,
    CONFIG_FILE_STEM,
    get_config_dir,
)

ENV_DOMAIN = "NEXTCLOUD_DOMAIN"
ENV_USER = "NEXTCLOUD_USER"
ENV_PASSWORD = "NEXTCLOUD_PASSWORD"

_FORMAT_EXTENSIONS = {"json": ".json", "yaml": ".yaml", "yml": ".yaml", "toml": ".toml"}


@dataclass
class Config:
    """Nextcloud server and credentials."""

    domain: str = ""
    user: str = ""
    password: str = ""


def normalize_url(url: str) -> str:
    """Trim trailing slashes and prepend https:// if no scheme is present."""
    url = (url or "").rstrip("/")
    lower = url.lower()
    if not lower.startswith("http://") and not lower.startswith("https://"):
        url = "https://" + url
    return url


def get_config_dirs() -> List[Path]:
    """Return all config directories to search, in order of preference."""
    dirs = [get_config_dir()]
    # Also check ~/.config/cospend/ as fallback (even on macOS)
    dot_config_dir = Path.home() / ".config" / APP_NAME
    if dot_config_dir != dirs[0]:
        dirs.append(dot_config_dir)
    return dirs


def get_config_path() -> Optional[Path]:
    """Return the path to an existing config file, or None if none found."""
    for config_dir in get_config_dirs():
        for ext in CONFIG_EXTENSIONS:
            path = config_dir / f"{CONFIG_FILE_STEM}{ext}"
            if path.is_file():
                return path
    return None


def load_from_file(path: Path) -> Config:
    """Read configuration from a JSON, YAML or TOML file.

    Raises:
        ValueError: If the file cannot be read or parsed, or the
            extension is not supported
    """
    path = Path(path)
    ext = path.suffix.lower()
    if ext not in CONFIG_EXTENSIONS:
        raise ValueError(f"unsupported config format: {ext}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"reading config file: {e}") from e

    try:
        if ext == ".json":
            data = json.loads(raw)
        elif ext in (".yaml", ".yml"):
            data = yaml.safe_load(raw)
        else:
            data = tomllib.loads(raw)
    except (json.JSONDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        raise ValueError(f"parsing {ext.lstrip('.').upper()} config: {e}") from e

    data = data or {}
    if not isinstance(data, dict):
        raise ValueError(f"parsing config: expected a mapping in {path}")

    return Config(
        domain=str(data.get("domain") or ""),
        user=str(data.get("user") or ""),
        password=str(data.get("password") or ""),
    )


def load_config() -> Config:
    """Load configuration: config file first, then environment overrides.

    Raises:
        ValueError: If a required field is missing after both sources
    """
    cfg = Config()

    config_path = get_config_path()
    if config_path is not None:
        LOG.debug(f"Loading config from {config_path}")
        cfg = load_from_file(config_path)

    # Environment variables override config file values
    domain = get_env(ENV_DOMAIN)
    if domain:
        cfg.domain = domain
    user = get_env(ENV_USER)
    if user:
        cfg.user = user
    password = get_env(ENV_PASSWORD)
    if password:
        cfg.password = password

    if not cfg.domain:
        raise ValueError(f"domain is required (set in config file or {ENV_DOMAIN} env var)")
    if not cfg.user:
        raise ValueError(f"user is required (set in config file or {ENV_USER} env var)")
    if not cfg.password:
        raise ValueError(f"password is required (set in config file or {ENV_PASSWORD} env var)")

    return cfg


def save_config_to_path(cfg: Config, path: Path) -> Path:
    """Write configuration to a specific file; format follows the extension.

    Raises:
        ValueError: For an unsupported extension
        OSError: If the file cannot be written
    """
    path = Path(path)
    ext = path.suffix.lower()
    data = asdict(cfg)

    if ext == ".json":
        content = json.dumps(data, indent=2) + "\n"
    elif ext in (".yaml", ".yml"):
        content = yaml.safe_dump(data, sort_keys=False)
    elif ext == ".toml":
        content = tomli_w.dumps(data)
    else:
        raise ValueError(f"unsupported config format: {ext}")

    mkdir_p(path.parent, mode=CONFIG_DIR_MODE)
    # Create with owner-only permissions before writing credentials
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(content)
    os.chmod(path, CONFIG_FILE_MODE)
    return path


def save_config(cfg: Config, fmt: str) -> Path:
    """Write configuration in the given format to the default config directory."""
    ext = _FORMAT_EXTENSIONS.get(fmt)
    if ext is None:
        raise ValueError(f"unsupported format: {fmt}")
    return save_config_to_path(cfg, get_config_dir() / f"{CONFIG_FILE_STEM}{ext}")
