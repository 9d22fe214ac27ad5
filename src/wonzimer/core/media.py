#!/usr/bin/env python3
"""
Purpose:
    Pydantic models for the Wonzimer media protocol records (media data,
    bid shares, asks, bids, EIP-712 signatures) plus the constructors used to
    build them with the protocol's input rules applied.

Amounts and shares are plain integers in the token's smallest unit;
percentages use 18-decimal fixed point (`DecimalValue`).
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Annotated, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

# --- Fixed point --- #

DECIMALS = 18
ONE_HUNDRED_PERCENT = 100 * 10 ** DECIMALS

_ADDRESS_HEX_LEN = 40
_BYTES32_HEX_LEN = 64


def _normalize_bytes32(v) -> str:
    """Accept 32-byte hex with or without `0x`, any case; store lowercase without prefix."""
    if isinstance(v, (bytes, bytearray)):
        v = bytes(v).hex()
    s = "" if v is None else str(v).strip()
    if s[:2].lower() == "0x":
        s = s[2:]
    s = s.lower()
    if len(s) != _BYTES32_HEX_LEN or any(c not in "0123456789abcdef" for c in s):
        raise ValueError(f"{v!r} is not a 32-byte hex string")
    return s


def _normalize_address(v) -> str:
    s = "" if v is None else str(v).strip()
    body = s[2:] if s[:2].lower() == "0x" else ""
    if len(body) != _ADDRESS_HEX_LEN or any(c not in "0123456789abcdefABCDEF" for c in body):
        raise ValueError(f"{v!r} is not a valid address")
    return "0x" + body


Bytes32 = Annotated[str, BeforeValidator(_normalize_bytes32)]
Address = Annotated[str, BeforeValidator(_normalize_address)]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class DecimalValue(_Record):
    """A percentage-like value scaled by 10**18."""
    value: int = Field(..., ge=0)

    def as_decimal(self) -> Decimal:
        return Decimal(self.value) / (Decimal(10) ** DECIMALS)


def decimal_value(value: Union[int, float, str, Decimal]) -> DecimalValue:
    """
    Scale a human number into an 18-decimal `DecimalValue`.

    >>> decimal_value(10).value
    10000000000000000000
    >>> decimal_value("0.5").value
    500000000000000000

    Raises:
        ValueError: if the value is negative, not numeric, or has more than 18 decimals
    """
    try:
        d = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"{value!r} is not a number") from e
    scaled = d * (Decimal(10) ** DECIMALS)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"{value!r} has more than {DECIMALS} decimal places")
    return DecimalValue(value=int(scaled))


# --- Protocol records --- #

class MediaData(_Record):
    """URIs and recorded SHA-256 hashes of a media item and its metadata document."""
    token_uri: str
    metadata_uri: str
    content_hash: Bytes32
    metadata_hash: Bytes32

    @field_validator("token_uri", "metadata_uri")
    @classmethod
    def _https_only(cls, v: str) -> str:
        validate_uri(v)
        return v


class BidShares(_Record):
    """Split of each sale between creator, current owner and previous owner."""
    creator: DecimalValue
    owner: DecimalValue
    prev_owner: DecimalValue

    @model_validator(mode="after")
    def _sum_to_hundred(self) -> "BidShares":
        validate_bid_shares(self.creator, self.owner, self.prev_owner)
        return self


class Ask(_Record):
    currency: Address
    amount: int = Field(..., ge=0)


class Bid(_Record):
    currency: Address
    amount: int = Field(..., ge=0)
    bidder: Address
    recipient: Address
    sell_on_share: DecimalValue


class EIP712Signature(_Record):
    deadline: int = Field(..., ge=0)
    v: int
    r: Bytes32
    s: Bytes32


class EIP712Domain(_Record):
    name: str
    version: str
    chain_id: int
    verifying_contract: Address


# --- Validators --- #

def validate_uri(uri: str) -> None:
    """Raise ValueError unless `uri` is an https:// URI."""
    if not isinstance(uri, str) or not uri.startswith("https://"):
        raise ValueError(f"{uri} must begin with `https://`")


def validate_bid_shares(creator: DecimalValue, owner: DecimalValue, prev_owner: DecimalValue) -> None:
    """Raise ValueError unless the three shares sum to exactly 100 percent."""
    total = creator.value + owner.value + prev_owner.value
    if total != ONE_HUNDRED_PERCENT:
        shown = Decimal(total) / (Decimal(10) ** DECIMALS)
        raise ValueError(f"The BidShares sum to {format(shown.normalize(), 'f')}, but they must sum to 100")


# --- Constructors --- #

def construct_media_data(token_uri: str, metadata_uri: str, content_hash, metadata_hash) -> MediaData:
    return MediaData(
        token_uri=token_uri,
        metadata_uri=metadata_uri,
        content_hash=content_hash,
        metadata_hash=metadata_hash,
    )


def construct_bid_shares(creator, owner, prev_owner) -> BidShares:
    """Build BidShares from human percentages, e.g. `construct_bid_shares(10, 90, 0)`."""
    return BidShares(
        creator=decimal_value(creator),
        owner=decimal_value(owner),
        prev_owner=decimal_value(prev_owner),
    )


def construct_ask(currency: str, amount: int) -> Ask:
    return Ask(currency=currency, amount=amount)


def construct_bid(currency: str, amount: int, bidder: str, recipient: str, sell_on_share) -> Bid:
    return Bid(
        currency=currency,
        amount=amount,
        bidder=bidder,
        recipient=recipient,
        sell_on_share=decimal_value(sell_on_share),
    )
