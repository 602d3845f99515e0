"""Tests for the grant catalog provider."""

import json
from datetime import date

import pytest
import yaml

from capital_cupid.catalog import MOCK_GRANTS, GrantNotFoundError, StaticCatalog, load_catalog

from conftest import make_grant


def test_mock_catalog_contents(catalog):
    assert [g.id for g in catalog.get_all()] == ["mdec-digital-boost", "sme-corp-export", "cradle-cip"]
    assert catalog.get_by_id("mdec-digital-boost").tags == ["Technology", "Digitalisation", "Manufacturing"]
    assert catalog.get_by_id("cradle-cip").deadline == date(2024, 10, 30)


def test_get_by_id_not_found(catalog):
    with pytest.raises(GrantNotFoundError) as exc_info:
        catalog.get_by_id("missing")
    assert exc_info.value.grant_id == "missing"
    assert isinstance(exc_info.value, LookupError)


def test_get_many_catalog_order_skips_unknown(catalog):
    grants = catalog.get_many(["cradle-cip", "nope", "mdec-digital-boost"])
    assert [g.id for g in grants] == ["mdec-digital-boost", "cradle-cip"]


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError, match="Duplicate"):
        StaticCatalog([make_grant("a"), make_grant("a")])


def test_load_catalog_default():
    assert [g.id for g in load_catalog().get_all()] == [g.id for g in MOCK_GRANTS]


def test_load_catalog_json_and_yaml(tmp_path):
    records = [g.model_dump(mode="json", by_alias=True) for g in MOCK_GRANTS[:2]]
    json_path = tmp_path / "grants.json"
    json_path.write_text(json.dumps(records))
    yaml_path = tmp_path / "grants.yml"
    yaml_path.write_text(yaml.safe_dump(records))

    for path in (json_path, yaml_path):
        assert load_catalog(str(path)).get_all() == MOCK_GRANTS[:2]


def test_load_catalog_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog(str(tmp_path / "missing.json"))

    bad_suffix = tmp_path / "grants.csv"
    bad_suffix.write_text("id")
    with pytest.raises(ValueError, match="Unsupported"):
        load_catalog(str(bad_suffix))

    not_list = tmp_path / "grants.json"
    not_list.write_text('{"id": "x"}')
    with pytest.raises(ValueError, match="list"):
        load_catalog(str(not_list))
