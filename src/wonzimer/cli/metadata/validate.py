#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from wonzimer.core.app_context import AppContext
from wonzimer.core.fields_loader import load_fields_file


def validate_file(file_path: Path, version: str, ctx: AppContext) -> Tuple[bool, str, List[str]]:
    """
    Returns: (is_valid, summary_message, error_list)

    Unresolvable versions propagate; only payload problems become results.
    """
    try:
        payload = load_fields_file(file_path)
    except (OSError, ValueError) as e:
        return False, f"{file_path}: Failed to read ({e})", []

    errors = ctx.engine.errors(version, payload)
    if errors:
        return False, f"{file_path}: Validation Failed", errors
    return True, f"{file_path}: Validation Passed", []


def validate(args, ctx: AppContext) -> int:
    try:
        ctx.schemas.resolve(args.version)
    except (LookupError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    success = 0
    for raw in args.files:
        ok, msg, errs = validate_file(Path(raw), args.version, ctx)
        print(f"\n{msg}")
        for e in errs:
            print(f"  - {e}")
        if ok:
            success += 1

    total = len(args.files)
    print(f"\nValidation complete: {success}/{total} passed.")
    return 0 if success == total else 1


def register(subparser):
    parser = subparser.add_parser("validate", help="Validate metadata files against a schema version.")
    parser.add_argument("version", help="Version identifier, e.g. wonzimer-20210101")
    parser.add_argument("files", nargs="+", help="Metadata files (.json/.yml/.yaml) to validate.")
    parser.set_defaults(func=validate)
