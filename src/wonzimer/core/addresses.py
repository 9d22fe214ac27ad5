#!/usr/bin/env python3
"""
Purpose:
    Keyed lookup of deployed protocol contract addresses per network.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Final, Union

from pydantic import RootModel

from wonzimer.core.constants import DEFAULT_TEXT_ENCODING

# Networks with official protocol deployments
CHAIN_ID_TO_NETWORK: Final[Dict[int, str]] = {
    1: "mainnet",
    4: "rinkeby",
}


def chain_id_to_network_name(chain_id: int) -> str:
    """
    Map a chain id to the network name used as the address-book key.

    Raises:
        LookupError: if the chain has no official deployment
    """
    try:
        return CHAIN_ID_TO_NETWORK[int(chain_id)]
    except (KeyError, TypeError, ValueError):
        raise LookupError(f"chainId {chain_id} not officially supported by the Wonzimer Protocol") from None


class AddressBook(RootModel[Dict[str, Dict[str, str]]]):
    """
    `{network: {contract: address}}` mapping, e.g.
    `{"mainnet": {"media": "0x...", "market": "0x..."}}`.
    """

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "AddressBook":
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"The file {str(p)!r} does not exist")
        return cls.model_validate_json(p.read_text(encoding=DEFAULT_TEXT_ENCODING))

    def networks(self) -> list[str]:
        return sorted(self.root.keys())

    def for_network(self, network: str) -> Dict[str, str]:
        """Contract addresses for a network name; LookupError if absent."""
        try:
            return dict(self.root[network])
        except KeyError:
            raise LookupError(f"No addresses recorded for network {network!r}") from None

    def for_chain(self, chain_id: int) -> Dict[str, str]:
        return self.for_network(chain_id_to_network_name(chain_id))
