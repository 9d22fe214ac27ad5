#!/usr/bin/env python3

import argparse

from . import generate, parse, template, validate


def register(subparser: argparse._SubParsersAction):
    """
    Register all metadata subcommands:
      - wonzimer metadata generate
      - wonzimer metadata parse
      - wonzimer metadata validate
      - wonzimer metadata template
    """
    md_parser = subparser.add_parser("metadata", help="Metadata document commands")
    md_subparsers = md_parser.add_subparsers(dest="metadata_cmd")

    def metadata_default(args, ctx):
        md_parser.print_help()
        return 1
    md_parser.set_defaults(func=metadata_default)

    generate.register(md_subparsers)
    parse.register(md_subparsers)
    validate.register(md_subparsers)
    template.register(md_subparsers)
