#!/usr/bin/env python3
import json

import pytest

from wonzimer.core.canonical import canonical_json, order_document, serialize
from wonzimer.core.schema.registry import SchemaRegistry


@pytest.fixture(scope="module")
def registry():
    return SchemaRegistry.bundled()


@pytest.fixture
def wonzimer_schema(registry):
    return registry.resolve("wonzimer-20210101").schema


@pytest.fixture
def catalog_schema(registry):
    return registry.resolve("catalog-20210202").schema


# --- Key order --- #

def test_keys_follow_declared_order(wonzimer_schema):
    doc = {
        "version": "wonzimer-20210101",
        "name": "wonzimer whitepaper",
        "mimeType": "application/json",
        "description": "internet renaissance",
    }
    assert serialize(doc, wonzimer_schema) == (
        b'{"description":"internet renaissance","mimeType":"application/json",'
        b'"name":"wonzimer whitepaper","version":"wonzimer-20210101"}'
    )


def test_declared_order_is_not_alphabetical(catalog_schema):
    doc = {"duration": 1, "artist": "b", "title": "a", "version": "catalog-20210202"}
    out = json.loads(serialize(doc, catalog_schema))
    assert list(out) == ["version", "title", "artist", "duration"]


def test_nested_dicts_and_list_items_are_ordered(catalog_schema):
    doc = {
        "credits": [{"role": "producer", "name": "A"}],
        "artwork": {"mimeType": "image/png", "uri": "https://a", "isNft": True},
    }
    assert serialize(doc, catalog_schema) == (
        b'{"artwork":{"isNft":true,"uri":"https://a","mimeType":"image/png"},'
        b'"credits":[{"name":"A","role":"producer"}]}'
    )


def test_logically_identical_documents_serialize_identically(catalog_schema):
    a = {"title": "t", "project": {"type": "EP", "title": "p"}, "tags": ["x", "y"]}
    b = {"tags": ["x", "y"], "project": {"title": "p", "type": "EP"}, "title": "t"}
    assert serialize(a, catalog_schema) == serialize(b, catalog_schema)


def test_list_element_order_is_preserved(catalog_schema):
    out = serialize({"tags": ["b", "a"]}, catalog_schema)
    assert out == b'{"tags":["b","a"]}'


def test_undeclared_keys_follow_in_sorted_order(wonzimer_schema):
    doc = {"zeta": 1, "name": "n", "alpha": {"b": 1, "a": 2}}
    assert serialize(doc, wonzimer_schema) == b'{"name":"n","alpha":{"a":2,"b":1},"zeta":1}'


# --- Rendering --- #

def test_output_is_minimal_utf8(wonzimer_schema):
    out = serialize({"name": "café ✓", "description": "a b"}, wonzimer_schema)
    assert out == '{"description":"a b","name":"café ✓"}'.encode("utf-8")
    assert b" :" not in out and b", " not in out


def test_non_finite_numbers_are_rejected(catalog_schema):
    with pytest.raises(ValueError):
        serialize({"duration": float("nan")}, catalog_schema)


def test_order_document_does_not_mutate_input(catalog_schema):
    doc = {"title": "t", "version": "v"}
    ordered = order_document(doc, catalog_schema.structure)
    assert list(doc) == ["title", "version"]
    assert list(ordered) == ["version", "title"]


def test_canonical_json_sorts_keys():
    assert canonical_json({"b": 1, "a": [{"d": None, "c": True}]}) == b'{"a":[{"c":true,"d":null}],"b":1}'
