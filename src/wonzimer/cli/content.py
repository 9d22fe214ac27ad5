#!/usr/bin/env python3
"""`wonzimer hash` and `wonzimer verify`: content digests and URI verification."""

from pathlib import Path

from wonzimer.core.app_context import AppContext
from wonzimer.core.hashing import is_content_digest, sha256_from_file


def register(subparsers):
    hp = subparsers.add_parser("hash", help="Print the SHA-256 content digest of files")
    hp.add_argument("files", nargs="+", help="Files to hash")
    hp.add_argument("--prefix", action="store_true", help="Prefix digests with 0x (on-chain bytes32 form)")
    hp.set_defaults(func=hash_files)

    vp = subparsers.add_parser("verify", help="Fetch a URI and compare it with a recorded digest")
    vp.add_argument("uri", help="Content URI (https://...)")
    vp.add_argument("digest", help="Recorded SHA-256 digest (64 lowercase hex chars, optional 0x)")
    vp.set_defaults(func=verify_uri)


def hash_files(args, ctx: AppContext) -> int:
    status = 0
    for raw in args.files:
        p = Path(raw)
        try:
            value = sha256_from_file(p)
        except OSError as e:
            print(f"{p}: {e}")
            status = 1
            continue
        print(f"{'0x' if args.prefix else ''}{value}  {p}")
    return status


def verify_uri(args, ctx: AppContext) -> int:
    declared = args.digest[2:] if args.digest[:2] == "0x" else args.digest
    if not is_content_digest(declared):
        print(f"Invalid digest {args.digest!r}: expected 64 lowercase hex characters")
        return 1

    result = ctx.engine.verify_uri(args.uri, declared)
    print(f"{args.uri}: {result.status.value}")
    if result.actual_digest and not result.verified:
        print(f"  recorded: {declared}\n  fetched:  {result.actual_digest}")
    if result.error:
        print(f"  {result.error}")
    return 0 if result.verified else 1
