#!/usr/bin/env python3
import pytest
import yaml

from wonzimer.core.engine import MetadataEngine
from wonzimer.core.scaffold import build_template, render_yaml_template
from wonzimer.core.schema.registry import SchemaRegistry


@pytest.fixture(scope="module")
def registry():
    return SchemaRegistry.bundled()


def test_wonzimer_template_prefills_version(registry):
    schema = registry.resolve("wonzimer-20210101").schema
    assert build_template(schema) == {
        "description": "<required>",
        "mimeType": "<required>",
        "name": "<required>",
        "version": "wonzimer-20210101",
    }


def test_catalog_template_placeholders(registry):
    tpl = build_template(registry.resolve("catalog-20210202").schema)
    assert list(tpl)[:5] == ["version", "title", "artist", "description", "duration"]
    assert tpl["description"] == "<optional>"
    assert tpl["duration"] == 0
    assert tpl["mimeType"] == "audio/mpeg"
    assert tpl["explicit"] is False
    assert tpl["project"] == {"title": "<required>", "type": "Single", "upc": "<optional>"}
    assert tpl["credits"] == [{"name": "<required>", "role": "<required>"}]
    assert tpl["tags"] == ["<required>"]


def test_required_only_template_is_a_valid_document(registry):
    schema = registry.resolve("catalog-20210202").schema
    tpl = build_template(schema, include_optional=False)
    assert list(tpl) == ["version", "title", "artist", "duration", "mimeType"]
    assert MetadataEngine(registry).validate("catalog-20210202", tpl)


def test_render_yaml_template_round_trips(registry):
    schema = registry.resolve("catalog-20210202").schema
    text = render_yaml_template(schema)
    assert text.splitlines()[0] == "# catalog-20210202 - Catalog audio metadata"
    loaded = yaml.safe_load(text)
    assert loaded == build_template(schema)
    assert list(loaded) == list(build_template(schema))
