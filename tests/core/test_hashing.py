#!/usr/bin/env python3
import pytest

from wonzimer.core.hashing import (
    digest,
    is_content_digest,
    sha256_from_buffer,
    sha256_from_file,
    sha256_from_hex_string,
)

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
HELLO_WORLD_SHA256 = "b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9"


# --- Buffers --- #

def test_known_digests():
    assert sha256_from_buffer(b"") == EMPTY_SHA256
    assert sha256_from_buffer(b"hello world") == HELLO_WORLD_SHA256


def test_digest_alias_and_bytearray_input():
    assert digest(bytearray(b"hello world")) == HELLO_WORLD_SHA256


def test_digest_shape():
    d = sha256_from_buffer(b"some media bytes")
    assert len(d) == 64
    assert d == d.lower()
    assert not d.startswith("0x")
    assert is_content_digest(d)


def test_single_byte_change_changes_most_of_the_digest():
    a = sha256_from_buffer(b"hello world")
    b = sha256_from_buffer(b"hello worle")
    assert sum(x != y for x, y in zip(a, b)) > 32


# --- Files --- #

def test_file_digest_matches_buffer_digest(tmp_path):
    data = bytes(range(256)) * 50
    p = tmp_path / "media.bin"
    p.write_bytes(data)
    assert sha256_from_file(p, chunk_size=100) == sha256_from_buffer(data)
    assert sha256_from_file(str(p)) == sha256_from_buffer(data)


def test_file_digest_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        sha256_from_file(tmp_path / "missing.bin")


# --- Hex strings --- #

@pytest.mark.parametrize("hex_string", ["68656c6c6f20776f726c64", "0x68656c6c6f20776f726c64", "0X68656C6C6F20776F726C64"])
def test_hex_string_digest(hex_string):
    assert sha256_from_hex_string(hex_string) == HELLO_WORLD_SHA256


def test_hex_string_rejects_invalid_hex():
    with pytest.raises(ValueError):
        sha256_from_hex_string("0xnothex")


@pytest.mark.parametrize("value", [None, 1, "", "0x" + EMPTY_SHA256, EMPTY_SHA256.upper(), EMPTY_SHA256[:-1]])
def test_is_content_digest_rejects(value):
    assert not is_content_digest(value)
