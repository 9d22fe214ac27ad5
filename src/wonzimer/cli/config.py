#!/usr/bin/env python3
import json

from wonzimer.core.app_context import AppContext


def register(subparsers):
    sp = subparsers.add_parser("config", help="Config utilities")
    sps = sp.add_subparsers(dest="config_cmd")

    showp = sps.add_parser("show", help="Show effective config")
    showp.set_defaults(func=show_config)

    addrp = sps.add_parser("addresses", help="Show contract addresses for a chain id")
    addrp.add_argument("chain_id", type=int, help="Chain id (1 = mainnet, 4 = rinkeby)")
    addrp.set_defaults(func=show_addresses)


def show_config(args, ctx: AppContext) -> int:
    print(json.dumps(ctx.config, indent=2))
    return 0


def show_addresses(args, ctx: AppContext) -> int:
    try:
        addresses = ctx.address_book().for_chain(args.chain_id)
    except (LookupError, OSError, ValueError) as e:
        print(f"Address lookup failed: {e}")
        return 1
    print(json.dumps(addresses, indent=2, sort_keys=True))
    return 0
