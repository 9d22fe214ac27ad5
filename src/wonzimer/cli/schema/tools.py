#!/usr/bin/env python3

import json

from wonzimer.core.app_context import AppContext
from wonzimer.core.schema.metadata_schema import MetadataSchema


def register(subparsers):
    sp = subparsers.add_parser("schema", help="Schema utilities")
    sps = sp.add_subparsers(dest="schema_cmd")

    # default when user runs: `wonzimer schema`
    def schema_default(args, ctx: AppContext) -> int:
        sp.print_help()
        return 1
    sp.set_defaults(func=schema_default)

    lp = sps.add_parser("list", help="List registered schema versions")
    lp.add_argument("--all", action="store_true", help="Include invalid schema files")
    lp.add_argument("--invalid", action="store_true", help="Show only invalid schema files")
    lp.add_argument("--json", action="store_true", help="JSON output")
    lp.set_defaults(func=list_schemas)

    ssp = sps.add_parser("show", help="Show schema JSON for a version identifier")
    ssp.add_argument("version", help="Version identifier, e.g. wonzimer-20210101")
    ssp.set_defaults(func=show_schema)

    dsp = sps.add_parser("doctor", help="Scan schema roots and report issues")
    dsp.set_defaults(func=doctor_schema)


def list_schemas(args, ctx: AppContext) -> int:
    if args.invalid:
        entries = ctx.schemas.invalid_entries()
    elif args.all:
        entries = ctx.schemas.entries()
    else:
        entries = ctx.schemas.valid_entries()

    if args.json:
        payload = [{
            "name": e.name,
            "valid": e.valid,
            "path": str(e.path),
            "reason": e.reason,
        } for e in entries]
        print(json.dumps(payload, indent=2))
        return 0 if payload else 1

    if not entries:
        print("No schemas found.")
        return 1

    print("Schemas Found:")
    for e in sorted(entries, key=lambda x: (not x.valid, x.name)):
        if e.valid:
            status = "✓ valid"
        else:
            brief = e.reason.splitlines()[0] if e.reason else "unknown"
            status = f"✗ invalid ({brief})"
        print(f"  - {e.name:24} {status:35}  {e.path}")
    return 0


def show_schema(args, ctx: AppContext) -> int:
    try:
        entry = ctx.schemas.resolve(args.version)
    except (LookupError, ValueError) as e:
        print(f"Schema '{args.version}' not found: {e}")
        return 1
    print(json.dumps(entry.schema.to_dict(), indent=2))
    return 0


def doctor_schema(args, ctx: AppContext) -> int:
    print("Schema roots:")
    for r in ctx.schemas.roots:
        print(f"  • {r}  ({'exists' if r.exists() else 'missing'})")

    any_found = False
    for r in ctx.schemas.roots:
        if not r.exists():
            continue
        for p in sorted(r.rglob("*.json")):
            any_found = True
            try:
                s = MetadataSchema.from_file(p)
                print(f"  ✓ {p}  -> {s.version_identifier}")
            except (OSError, ValueError) as e:
                first = str(e).splitlines()[0]
                print(f"  ✗ {p}  -> INVALID: {first}")
    if not any_found:
        print("No *.json files found under configured roots.")
        return 1

    duplicates = [e for e in ctx.schemas.invalid_entries() if e.schema is not None]
    for e in duplicates:
        print(f"  ! {e.path}  -> {e.name}: {e.reason}")
    return 0
