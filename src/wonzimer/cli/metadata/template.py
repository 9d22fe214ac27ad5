#!/usr/bin/env python3

from pathlib import Path

from wonzimer.core.app_context import AppContext
from wonzimer.core.constants import DEFAULT_TEXT_ENCODING
from wonzimer.core.scaffold import render_yaml_template


def template(args, ctx: AppContext) -> int:
    """Write (or print) a YAML fields template for a schema version."""
    try:
        entry = ctx.schemas.resolve(args.version)
    except (LookupError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    text = render_yaml_template(entry.schema, include_optional=not args.required_only)
    if not args.output:
        print(text, end="")
        return 0

    out = Path(args.output).resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding=DEFAULT_TEXT_ENCODING)
    print(f"Template generated at {out}")
    return 0


def register(subparser):
    parser = subparser.add_parser("template", help="Generate a YAML fields template for a schema version.")
    parser.add_argument("version", help="Version identifier, e.g. catalog-20210202")
    parser.add_argument("--output", "-o", default=None, help="Write the template to this file.")
    parser.add_argument("--required-only", action="store_true", help="Leave out optional fields.")
    parser.set_defaults(func=template)
