#!/usr/bin/env python3

import argparse
import sys

from wonzimer.core.app import get_context
from wonzimer.core.log import configure_logging
from wonzimer.cli import config, content, metadata, schema


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wonzimer", description="Wonzimer media metadata toolkit")
    parser.add_argument("--log-level", default=None, help="Override the configured log level (e.g. DEBUG)")
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands (they accept ctx)
    metadata.register(subparsers)
    schema.register(subparsers)
    content.register(subparsers)
    config.register(subparsers)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    ctx = get_context()  # built once
    try:
        configure_logging(args.log_level or ctx.config.get("logging", {}).get("level", "INFO"))
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return args.func(args, ctx)


if __name__ == "__main__":
    sys.exit(main())
