"""cospend init: interactively create the configuration file.

Two login methods are offered:

* Nextcloud Login Flow v2: the user approves the CLI in a browser and the
  server hands back an app password, which is what gets stored.
* Username and password (or app token) typed at the prompt.
"""

import argparse
import getpass
import time
import webbrowser
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests

from cospend.common.cospend_client import CospendAPIError
from cospend.common.settings import (
    Config,
    get_config_path,
    normalize_url,
    save_config,
    save_config_to_path,
)
from cospend.common.utils import LOG
from cospend.constants.cospend import (
    LOGIN_FLOW_PATH,
    LOGIN_POLL_INTERVAL_SECONDS,
    LOGIN_POLL_TIMEOUT_SECONDS,
    LOGIN_REQUEST_TIMEOUT_SECONDS,
    USER_AGENT,
)

FORMAT_CHOICES = ["json", "yaml", "yml", "toml"]

LOGIN_METHODS: List[Tuple[str, str]] = [
    ("Browser login (recommended)", "Opens browser for secure authentication"),
    ("Password/App token", "Enter credentials manually"),
]

EPILOG = """
Config file location:
  Linux:   ~/.config/cospend/cospend.{ext}
  macOS:   ~/Library/Application Support/cospend/cospend.{ext}
  Windows: %APPDATA%\\cospend\\cospend.{ext}
"""


def register(subparsers, parents) -> None:
    parser = subparsers.add_parser(
        "init",
        parents=parents,
        help="Initialize configuration file",
        description=(
            "Initialize a configuration file with your Nextcloud credentials. "
            "Prompts for the Nextcloud domain and a login method, then saves "
            "the credentials to a config file."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="config_format",
        default="json",
        help="Config file format (json, yaml, toml)",
    )
    parser.set_defaults(func=run)


def prompt_string(prompt: str) -> str:
    try:
        return input(f"{prompt}: ").strip()
    except EOFError:
        raise ValueError("reading input: no more input") from None


def prompt_yes_no(prompt: str) -> bool:
    answer = prompt_string(f"{prompt} [y/N]").lower()
    return answer in ("y", "yes")


def prompt_select(options: List[Tuple[str, str]]) -> int:
    """Numbered menu; an empty answer picks the first option."""
    for i, (label, description) in enumerate(options, start=1):
        print(f"  {i}. {label} - {description}")
    print()

    choice = prompt_string("Enter choice [1]")
    if not choice:
        return 0
    try:
        index = int(choice)
    except ValueError:
        index = 0
    if index < 1 or index > len(options):
        raise ValueError(f"invalid choice: {choice}")
    return index - 1


def password_auth(domain: str) -> Config:
    user = prompt_string("Username")
    password = getpass.getpass("Password (or app token): ")
    return Config(domain=domain, user=user, password=password)


def poll_for_login(
    session: requests.Session,
    endpoint: str,
    token: str,
    timeout: float = LOGIN_POLL_TIMEOUT_SECONDS,
    interval: float = LOGIN_POLL_INTERVAL_SECONDS,
    sleep: Optional[Callable[[float], None]] = None,
    clock: Optional[Callable[[], float]] = None,
) -> Dict[str, Any]:
    """Poll the login endpoint until the user approves the login.

    HTTP 200 carries the credentials, 404 means the user has not approved
    yet. Connection errors are retried until the deadline.

    Raises:
        CospendAPIError: On any other status, an undecodable result or timeout
    """
    sleep = sleep or time.sleep
    clock = clock or time.monotonic
    deadline = clock() + timeout
    while clock() < deadline:
        try:
            resp = session.post(
                endpoint,
                data={"token": token},
                headers={"User-Agent": USER_AGENT},
                timeout=LOGIN_REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            LOG.debug(f"Login poll failed: {e}")
            sleep(interval)
            continue

        if resp.status_code == 200:
            try:
                return resp.json()
            except ValueError as e:
                raise CospendAPIError(f"parsing login result: {e}") from e

        if resp.status_code == 404:
            sleep(interval)
            continue

        raise CospendAPIError(f"unexpected status during polling: {resp.status_code}")

    raise CospendAPIError(f"authentication timed out ({int(timeout // 60)} minutes)")


def login_flow_auth(domain: str, session: Optional[requests.Session] = None) -> Config:
    """Authenticate with Nextcloud Login Flow v2 and return the app password config."""
    session = session or requests.Session()

    try:
        resp = session.post(
            f"{domain}{LOGIN_FLOW_PATH}",
            headers={"User-Agent": USER_AGENT},
            timeout=LOGIN_REQUEST_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise CospendAPIError(f"initiating login flow: {e}") from e
    if resp.status_code != 200:
        raise CospendAPIError(f"login flow initiation failed with status {resp.status_code}")

    try:
        flow = resp.json()
        login_url = flow["login"]
        endpoint = flow["poll"]["endpoint"]
        token = flow["poll"]["token"]
    except (ValueError, KeyError, TypeError) as e:
        raise CospendAPIError(f"parsing login flow response: {e}") from e

    print()
    print("Opening browser for authentication...")
    print("If the browser doesn't open, visit this URL manually:")
    print(login_url)
    print()

    if not webbrowser.open(login_url):
        LOG.warning("Couldn't open browser")

    print("Waiting for authentication...")
    result = poll_for_login(session, endpoint, token)
    print("Authentication successful!")

    return Config(
        domain=result.get("server") or domain,
        user=result.get("loginName") or "",
        password=result.get("appPassword") or "",
    )


def run(args: argparse.Namespace) -> None:
    if args.config_format not in FORMAT_CHOICES:
        raise ValueError(f"unsupported format: {args.config_format} (use json, yaml, or toml)")

    overwrite_path = get_config_path()
    if overwrite_path is not None:
        print(f"Config file already exists: {overwrite_path}")
        if not prompt_yes_no("Overwrite?"):
            print("Aborted.")
            return

    print("Setting up Cospend CLI configuration...")
    print()

    domain = prompt_string("Nextcloud domain (e.g., cloud.example.com)")
    if not domain:
        raise ValueError("domain is required")
    domain = normalize_url(domain)

    print()
    print("Choose login method:")
    if prompt_select(LOGIN_METHODS) == 0:
        cfg = login_flow_auth(domain)
    else:
        cfg = password_auth(domain)

    try:
        if overwrite_path is not None:
            path = save_config_to_path(cfg, overwrite_path)
        else:
            path = save_config(cfg, args.config_format)
    except OSError as e:
        raise ValueError(f"saving config: {e}") from e

    print()
    print(f"Configuration saved to: {path}")
    print()
    print("You can now use cospend commands without setting environment variables.")
