"""modhost CLI entrypoint."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from .config import load_config
from .errors import RegistryError
from .host import ModuleHost
from .logging_utils import configure_logging, default_log_level, get_logger

logger = get_logger("cli")


def _run(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    host = ModuleHost.from_config(config)
    try:
        host.start()
        if args.health:
            print(json.dumps(host.health(), indent=2))
    finally:
        host.stop()
    return 0


def _list(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    host = ModuleHost.from_config(config)
    for name, info in host.health().items():
        category = info["category"] or "-"
        print(f"{name}\t{category}\t{info['path'] or '-'}")
    return 0


def _check(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    print(
        f"{args.config}: OK ({len(config.modules)} module(s), context={config.context.value})"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="modhost", description="Module registry host")
    parser.add_argument("--log-level", default=default_log_level())
    parser.add_argument("--log-dir", type=Path, default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Set up, init and start every module, then destroy")
    run.add_argument("--config", type=Path, required=True, help="Path to host manifest (YAML).")
    run.add_argument("--health", action="store_true", help="Print module health as JSON.")
    run.set_defaults(handler=_run)

    list_cmd = subparsers.add_parser("list", help="Register modules and list them")
    list_cmd.add_argument("--config", type=Path, required=True)
    list_cmd.set_defaults(handler=_list)

    check = subparsers.add_parser("check", help="Validate a host manifest without importing")
    check.add_argument("--config", type=Path, required=True)
    check.set_defaults(handler=_check)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_dir, args.log_level)
    try:
        return args.handler(args)
    except RegistryError as exc:
        logger.error("{}: {}", type(exc).__name__, exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
