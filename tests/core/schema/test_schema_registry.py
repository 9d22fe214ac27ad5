#!/usr/bin/env python3
import json
import logging

import pytest

from wonzimer.core.constants import BUNDLED_SCHEMA_ROOT
from wonzimer.core.errors import InvalidVersionIdentifier, UnknownCalendarVersion, UnknownNamespace
from wonzimer.core.schema.registry import SchemaRegistry
from wonzimer.core.schema.version import VersionIdentifier


def _write_schema(root, namespace, calendar_version, structure=None, name=None):
    d = root / namespace
    d.mkdir(parents=True, exist_ok=True)
    p = d / (name or f"{calendar_version}.json")
    p.write_text(json.dumps({
        "metadata": {"namespace": namespace, "calendar_version": calendar_version},
        "structure": structure if structure is not None else [{"fieldname": "name"}],
    }), encoding="utf-8")
    return p


# --- Bundled schemas --- #

def test_bundled_registry_supports_shipped_versions():
    reg = SchemaRegistry.bundled()
    assert reg.supported_versions() == ["catalog-20210202", "wonzimer-20210101"]
    assert reg.namespaces() == ["catalog", "wonzimer"]
    assert reg.versions("wonzimer") == ["20210101"]
    assert reg.invalid_entries() == []
    assert reg.roots == [BUNDLED_SCHEMA_ROOT]


def test_resolve_returns_schema_entry():
    entry = SchemaRegistry.bundled().resolve("wonzimer-20210101")
    assert entry.valid
    assert entry.name == "wonzimer-20210101"
    assert entry.namespace == "wonzimer"
    assert entry.calendar_version == "20210101"
    assert entry.schema.field_order == ["description", "mimeType", "name", "version"]


def test_resolve_accepts_version_identifier_objects():
    entry = SchemaRegistry.bundled().resolve(VersionIdentifier("catalog", "20210202"))
    assert entry.name == "catalog-20210202"


# --- Resolution failures --- #

def test_unknown_namespace():
    with pytest.raises(UnknownNamespace, match="There are no versions with the coinbase project name") as ei:
        SchemaRegistry.bundled().resolve("coinbase-20210101")
    assert ei.value.namespace == "coinbase"


def test_unknown_calendar_version():
    with pytest.raises(UnknownCalendarVersion) as ei:
        SchemaRegistry.bundled().resolve("wonzimer-20210102")
    assert str(ei.value) == (
        "There are no versions in the wonzimer namespace with the 20210102 calendar version"
    )
    assert isinstance(ei.value, LookupError)


def test_malformed_identifier_raises():
    with pytest.raises(InvalidVersionIdentifier):
        SchemaRegistry.bundled().resolve("wonzimer")


@pytest.mark.parametrize("raw,calendar_version", [("wonzimer-2021", "2021"), ("wonzimer-202101011", "202101011")])
def test_odd_calendar_versions_are_unknown_not_malformed(raw, calendar_version):
    with pytest.raises(UnknownCalendarVersion) as ei:
        SchemaRegistry.bundled().resolve(raw)
    assert str(ei.value) == (
        f"There are no versions in the wonzimer namespace with the {calendar_version} calendar version"
    )


@pytest.mark.parametrize("namespace", ["Coinbase", "Wonzimer"])
def test_namespaces_match_exactly(namespace):
    with pytest.raises(UnknownNamespace, match=f"There are no versions with the {namespace} project name"):
        SchemaRegistry.bundled().resolve(f"{namespace}-20210101")


def test_resolution_is_exact_not_nearest():
    reg = SchemaRegistry.bundled()
    assert reg.get("wonzimer-20210102") is None
    assert reg.get("wonzimer-20201231") is None


def test_get_and_contains():
    reg = SchemaRegistry.bundled()
    assert reg.get("catalog-20210202") is not None
    assert reg.get("unknown-20210101") is None
    assert "wonzimer-20210101" in reg
    assert "wonzimer-20990101" not in reg
    assert "not an identifier" not in reg
    assert 42 not in reg
    assert len(reg) == 2


# --- Extra roots --- #

def test_extra_root_adds_versions(tmp_path):
    _write_schema(tmp_path, "demo", "20240101")
    _write_schema(tmp_path, "demo", "20240601")
    reg = SchemaRegistry([tmp_path])
    assert reg.versions("demo") == ["20240101", "20240601"]
    assert "wonzimer-20210101" in reg
    assert reg.roots == [BUNDLED_SCHEMA_ROOT, tmp_path]


def test_registry_without_bundled_schemas(tmp_path):
    _write_schema(tmp_path, "demo", "20240101")
    reg = SchemaRegistry([tmp_path], include_bundled=False)
    assert reg.supported_versions() == ["demo-20240101"]


def test_missing_root_is_skipped(tmp_path):
    reg = SchemaRegistry([tmp_path / "missing"], include_bundled=False)
    assert len(reg) == 0
    assert reg.entries() == []


def test_bundled_schema_wins_over_user_duplicate(tmp_path):
    dup = _write_schema(tmp_path, "wonzimer", "20210101", structure=[{"fieldname": "other"}])
    reg = SchemaRegistry([tmp_path])

    entry = reg.resolve("wonzimer-20210101")
    assert entry.schema.field_order == ["description", "mimeType", "name", "version"]
    assert entry.path.parent.parent == BUNDLED_SCHEMA_ROOT.resolve()

    invalid = reg.invalid_entries()
    assert len(invalid) == 1
    assert invalid[0].path == dup.resolve()
    assert invalid[0].reason.startswith("duplicate-dropped")


def test_duplicate_within_one_root_keeps_first_scanned(tmp_path):
    _write_schema(tmp_path, "demo", "20240101", structure=[{"fieldname": "first"}], name="a.json")
    _write_schema(tmp_path, "demo", "20240101", structure=[{"fieldname": "second"}], name="b.json")
    reg = SchemaRegistry([tmp_path], include_bundled=False)
    assert reg.resolve("demo-20240101").schema.field_order == ["first"]
    assert [e.path.name for e in reg.invalid_entries()] == ["b.json"]


def test_invalid_schema_files_are_recorded_not_fatal(tmp_path, caplog):
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    _write_schema(tmp_path, "demo", "20240101", structure=[{"fieldname": "x", "fieldtype": "enum"}], name="bad.json")
    _write_schema(tmp_path, "demo", "20240601")

    with caplog.at_level(logging.WARNING, logger="wonzimer.core.schema.registry"):
        reg = SchemaRegistry([tmp_path], include_bundled=False)

    assert reg.supported_versions() == ["demo-20240601"]
    names = sorted(e.name for e in reg.invalid_entries())
    assert names == ["bad", "broken"]
    assert all(e.schema is None for e in reg.invalid_entries())
    assert "Ignoring schema file" in caplog.text


def test_non_json_files_are_ignored(tmp_path):
    (tmp_path / "notes.txt").write_text("hello", encoding="utf-8")
    reg = SchemaRegistry([tmp_path], include_bundled=False)
    assert reg.entries() == []
