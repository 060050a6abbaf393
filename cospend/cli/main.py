#!/usr/bin/env python3
"""Command-line entry point for the Nextcloud Cospend CLI."""

import argparse
import sys
from typing import List, Optional

from cospend.cli import add, delete, info, init, list_bills, projects
from cospend.cli.common import project_parent_parser
from cospend.common.cospend_client import CospendAPIError
from cospend.common.utils import LOG
from cospend.constants.cospend import VERSION
from cospend.constants.logging_config import enable_debug_logging

COMMANDS = [add, init, list_bills, delete, projects, info]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cospend",
        description="cospend is a command-line interface for Nextcloud Cospend projects.",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug output")
    parser.add_argument("-p", "--project", type=str, default=None, help="Project ID")
    parser.add_argument("-v", "--version", action="version", version=VERSION)

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    parents = [project_parent_parser()]
    for command in COMMANDS:
        command.register(subparsers, parents)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        enable_debug_logging()

    if args.command is None:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except (ValueError, CospendAPIError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        LOG.info("Operation cancelled by user")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
