#!/usr/bin/env python3

import json
from pathlib import Path

from wonzimer.core.app_context import AppContext
from wonzimer.core.constants import DEFAULT_TEXT_ENCODING
from wonzimer.core.errors import SchemaValidationError


def parse(args, ctx: AppContext) -> int:
    """Parse a raw metadata JSON file against a version and pretty-print it."""
    try:
        raw = Path(args.file).read_text(encoding=DEFAULT_TEXT_ENCODING)
        document = ctx.engine.parse(args.version, raw)
    except SchemaValidationError as e:
        print(f"{args.file}: Validation Failed")
        for err in e.errors:
            print(f"  - {err}")
        return 1
    except (LookupError, OSError, ValueError) as e:
        print(f"Error parsing metadata: {e}")
        return 1

    print(json.dumps(document, indent=2, ensure_ascii=False))
    return 0


def register(subparser):
    parser = subparser.add_parser("parse", help="Parse and validate a raw metadata JSON file.")
    parser.add_argument("version", help="Version identifier, e.g. wonzimer-20210101")
    parser.add_argument("file", help="Path to the metadata JSON file.")
    parser.set_defaults(func=parse)
