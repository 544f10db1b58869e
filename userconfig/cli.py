"""cfgedit: inspect an application's user config from the command line."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Iterable

from .core.config import Config, UserConfigError
from .core.utils.exceptions import describe_error

APP_NAME = "cfgedit"
DEBUG_ENV = "USERCONFIG_DEBUG"

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="<which-config> is <user config dir>/<which-config>",
    )
    parser.add_argument("which_config", metavar="which-config", help="Application config to open")
    sub = parser.add_subparsers(dest="op", metavar="operation")
    sub.add_parser("list", help="List the keys in <which-config>.conf (default)")
    get = sub.add_parser("get", help="Print the value stored under a key")
    get.add_argument("key")
    sub.add_parser("path", help="Print the config directory")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    level = logging.DEBUG if os.environ.get(DEBUG_ENV) else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    args = _build_parser().parse_args(list(argv) if argv is not None else None)

    try:
        cfg = Config(args.which_config)
    except (UserConfigError, OSError) as exc:
        logger.debug("Failed to open config %r", args.which_config, exc_info=True)
        print(f"Couldn't find config directory: {args.which_config}", file=sys.stderr)
        print(f"  {describe_error(exc)}", file=sys.stderr)
        return 1

    op = args.op or "list"
    if op == "list":
        for key in sorted(cfg.get_key_list()):
            print(key)
    elif op == "get":
        print(cfg.get(args.key))
    elif op == "path":
        print(cfg.path)
    return 0
