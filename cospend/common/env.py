"""Environment variable loading utilities.

Centralizes .env file loading so every command sees the same
NEXTCLOUD_* overrides.
"""

import os
from functools import cache

from dotenv import find_dotenv, load_dotenv


@cache
def load_project_env() -> None:
    """Load the nearest .env file (searched from the working directory) once.

    Uses @cache so the body only executes once per process; existing
    environment variables are never overridden.
    """
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path, override=False)


def get_env(key: str, default: str = None) -> str:
    """Get environment variable, loading .env if needed.

    Args:
        key: Environment variable name
        default: Default value if not found

    Returns:
        Environment variable value or default
    """
    load_project_env()
    return os.getenv(key, default)
