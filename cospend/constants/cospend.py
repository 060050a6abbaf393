"""Constants related to the Nextcloud Cospend integration.

This module contains the API paths, request defaults and enums used when
talking to the Cospend OCS API and when rendering its data.
"""

from enum import StrEnum

VERSION = "0.1.0"

# OCS API paths (relative to the normalized server URL)
COSPEND_API_BASE = "/ocs/v2.php/apps/cospend/api/v1"
USER_INFO_PATH = "/ocs/v2.php/cloud/user"
LOGIN_FLOW_PATH = "/index.php/login/v2"

# OCS envelope status code that signals success
OCS_OK = 200

REQUEST_TIMEOUT_SECONDS = 30
USER_AGENT = "Cospend CLI"

# Nextcloud Login Flow v2 polling
LOGIN_POLL_INTERVAL_SECONDS = 2
LOGIN_POLL_TIMEOUT_SECONDS = 20 * 60
LOGIN_REQUEST_TIMEOUT_SECONDS = 10

# Bills created from the CLI never repeat
BILL_REPEAT_NONE = "n"

# Table cell width for bill names before truncation
MAX_NAME_WIDTH = 30


class OutputFormat(StrEnum):
    """Supported output formats for the list command."""

    TABLE = "table"
    CSV = "csv"
    JSON = "json"


class ConfigFormat(StrEnum):
    """Config file formats written by the init command."""

    JSON = "json"
    YAML = "yaml"
    TOML = "toml"
