#!/usr/bin/env python3
from decimal import Decimal

import pytest
from pydantic import ValidationError

from wonzimer.core.media import (
    EIP712Domain,
    EIP712Signature,
    ONE_HUNDRED_PERCENT,
    construct_ask,
    construct_bid,
    construct_bid_shares,
    construct_media_data,
    decimal_value,
    validate_bid_shares,
    validate_uri,
)

HASH = "ab" * 32
ADDRESS = "0x" + "A1" * 20


# --- decimal_value --- #

@pytest.mark.parametrize("raw,expected", [
    (10, 10 * 10 ** 18),
    ("0.5", 5 * 10 ** 17),
    (0.1, 10 ** 17),
    (Decimal("33.333333333333333333"), 33333333333333333333),
    (0, 0),
])
def test_decimal_value_scales_by_18_decimals(raw, expected):
    assert decimal_value(raw).value == expected


def test_decimal_value_as_decimal():
    assert decimal_value("12.5").as_decimal() == Decimal("12.5")


@pytest.mark.parametrize("raw", [-1, "1e-19", "abc"])
def test_decimal_value_rejects(raw):
    with pytest.raises(ValueError):
        decimal_value(raw)


# --- MediaData --- #

def test_construct_media_data_normalizes_hashes():
    md = construct_media_data("https://a/content", "https://a/meta", "0x" + HASH.upper(), bytes.fromhex(HASH))
    assert md.content_hash == HASH
    assert md.metadata_hash == HASH


@pytest.mark.parametrize("token_uri,metadata_uri", [
    ("http://a/content", "https://a/meta"),
    ("https://a/content", "ipfs://meta"),
])
def test_construct_media_data_requires_https(token_uri, metadata_uri):
    with pytest.raises(ValidationError, match="must begin with `https://`"):
        construct_media_data(token_uri, metadata_uri, HASH, HASH)


@pytest.mark.parametrize("bad_hash", ["", "0x1234", "zz" * 32, HASH + "00"])
def test_construct_media_data_rejects_bad_hashes(bad_hash):
    with pytest.raises(ValidationError, match="32-byte hex"):
        construct_media_data("https://a", "https://b", bad_hash, HASH)


def test_records_are_frozen():
    md = construct_media_data("https://a", "https://b", HASH, HASH)
    with pytest.raises(ValidationError):
        md.token_uri = "https://c"


def test_validate_uri_message():
    with pytest.raises(ValueError, match="^ftp://x must begin with `https://`$"):
        validate_uri("ftp://x")
    validate_uri("https://x")


# --- BidShares --- #

def test_construct_bid_shares_sum_to_hundred():
    shares = construct_bid_shares(10, 90, 0)
    assert shares.creator.value == 10 * 10 ** 18
    assert shares.creator.value + shares.owner.value + shares.prev_owner.value == ONE_HUNDRED_PERCENT


def test_construct_bid_shares_accepts_fractions():
    shares = construct_bid_shares("10.5", "89.25", "0.25")
    assert shares.prev_owner.as_decimal() == Decimal("0.25")


def test_construct_bid_shares_rejects_wrong_sum():
    with pytest.raises(ValidationError, match="The BidShares sum to 90, but they must sum to 100"):
        construct_bid_shares(10, 80, 0)


def test_validate_bid_shares_shows_fractional_sum():
    with pytest.raises(ValueError, match=r"sum to 100\.5,"):
        validate_bid_shares(decimal_value(50), decimal_value(50), decimal_value("0.5"))


# --- Ask / Bid --- #

def test_construct_ask():
    ask = construct_ask(ADDRESS, 100)
    assert ask.currency == ADDRESS
    assert ask.amount == 100


@pytest.mark.parametrize("currency,amount", [("0x1234", 1), ("A1" * 20, 1), (ADDRESS, -1)])
def test_construct_ask_rejects(currency, amount):
    with pytest.raises(ValidationError):
        construct_ask(currency, amount)


def test_construct_bid_scales_sell_on_share():
    bid = construct_bid(ADDRESS, 5, ADDRESS, "0X" + "b2" * 20, 10)
    assert bid.sell_on_share.value == 10 * 10 ** 18
    assert bid.recipient == "0x" + "b2" * 20


# --- EIP-712 --- #

def test_eip712_records():
    sig = EIP712Signature(deadline=1700000000, v=27, r="0x" + HASH, s=HASH)
    assert sig.r == HASH
    domain = EIP712Domain(name="Wonzimer", version="1", chain_id=1, verifying_contract=ADDRESS)
    assert domain.chain_id == 1
    with pytest.raises(ValidationError):
        EIP712Signature(deadline=-1, v=27, r=HASH, s=HASH)
