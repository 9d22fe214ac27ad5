#!/usr/bin/env python3

from pathlib import Path

from wonzimer.core.app_context import AppContext
from wonzimer.core.constants import DEFAULT_TEXT_ENCODING
from wonzimer.core.errors import SchemaValidationError
from wonzimer.core.fields_loader import load_fields_file
from wonzimer.core.hashing import sha256_from_buffer


def generate(args, ctx: AppContext) -> int:
    """
    Validate a JSON/YAML fields file and emit its canonical metadata JSON.
    """
    try:
        fields = load_fields_file(args.fields)
        text = ctx.engine.generate(args.version, fields)
    except SchemaValidationError as e:
        print(f"{args.fields}: Validation Failed")
        for err in e.errors:
            print(f"  - {err}")
        return 1
    except (LookupError, OSError, ValueError) as e:
        print(f"Error generating metadata: {e}")
        return 1

    if args.output:
        out = Path(args.output).resolve()
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding=DEFAULT_TEXT_ENCODING)
        print(f"Metadata written to {out}")
    else:
        print(text)

    if args.digest:
        print(f"sha256: {sha256_from_buffer(text.encode(DEFAULT_TEXT_ENCODING))}")
    return 0


def register(subparser):
    parser = subparser.add_parser("generate", help="Generate canonical metadata JSON from a fields file.")
    parser.add_argument("version", help="Version identifier, e.g. wonzimer-20210101")
    parser.add_argument("fields", help="Path to a .json/.yml/.yaml file with the metadata fields.")
    parser.add_argument("--output", "-o", default=None, help="Write the metadata to this file instead of stdout.")
    parser.add_argument("--digest", action="store_true", help="Also print the SHA-256 digest of the metadata.")
    parser.set_defaults(func=generate)
