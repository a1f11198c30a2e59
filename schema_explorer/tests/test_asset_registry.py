import json

import pytest

from schema_explorer.assets.asset_registry import SiteAssetRegistry
from schema_explorer.inference.schema_core import (
    AssetNotFoundError,
    AssetRegistryError,
    ComboPartMissingError,
)


SCHEMA = {"type": "object", "properties": {"a": {"type": "integer"}}, "required": ["a"]}


@pytest.fixture
def site_assets():
    return {
        "assets": [
            {"path": "content/property.json", "type": "json", "label": "Property"},
            {"path": "gallery", "type": "directory", "label": "Gallery"},
            {
                "path": "team",
                "type": "directory",
                "label": "Team",
                "contains": {
                    "type": "combo",
                    "parts": [
                        {"assetType": "text", "extension": ".md"},
                        {"assetType": "json", "extension": ".json"},
                    ],
                },
            },
            {
                "path": "broken",
                "type": "directory",
                "label": "Broken",
                "contains": {"type": "combo", "parts": [{"assetType": "image"}]},
            },
        ]
    }


@pytest.fixture
def registry(tmp_path, site_assets):
    path = tmp_path / "site-assets.json"
    path.write_text(json.dumps(site_assets), encoding="utf-8")
    registry = SiteAssetRegistry(path)
    registry.load()
    return registry


def test_find_direct_file_asset(registry):
    asset, is_combo_part = registry.find_asset("content/property.json")
    assert asset["label"] == "Property"
    assert not is_combo_part


def test_find_normalizes_backslashes(registry):
    asset, _ = registry.find_asset("content\\property.json")
    assert asset["label"] == "Property"


def test_find_directory_asset(registry):
    asset, is_combo_part = registry.find_asset("gallery", is_directory=True)
    assert asset["label"] == "Gallery"
    assert not is_combo_part


def test_find_file_in_combo_directory(registry):
    asset, is_combo_part = registry.find_asset("team/alice.json")
    assert asset["label"] == "Team"
    assert is_combo_part


def test_file_in_plain_directory_is_not_found(registry):
    with pytest.raises(AssetNotFoundError):
        registry.find_asset("gallery/photo.json")


def test_directory_lookup_ignores_file_assets(registry):
    with pytest.raises(AssetNotFoundError):
        registry.find_asset("content/property.json", is_directory=True)


def test_apply_schema_to_asset(registry):
    registry.apply_schema("content/property.json", SCHEMA)
    assert registry.assets[0]["schema"] == SCHEMA


def test_apply_schema_to_combo_json_part(registry):
    registry.apply_schema("team/alice.json", SCHEMA)

    parts = registry.assets[2]["contains"]["parts"]
    assert parts[1]["schema"] == SCHEMA
    assert "schema" not in parts[0]
    assert "schema" not in registry.assets[2]


def test_apply_schema_to_combo_directory(registry):
    registry.apply_schema("team", SCHEMA, is_directory=True)
    assert registry.assets[2]["contains"]["parts"][1]["schema"] == SCHEMA


def test_combo_without_json_part(registry):
    with pytest.raises(ComboPartMissingError):
        registry.apply_schema("broken/x.json", SCHEMA)


def test_save_round_trip(registry):
    registry.apply_schema("gallery", SCHEMA, is_directory=True)
    registry.save()

    reloaded = SiteAssetRegistry(registry.path)
    assert reloaded.assets[1]["schema"] == SCHEMA
    assert list(reloaded.assets[1]["schema"].keys()) == ["type", "properties", "required"]


def test_load_missing_registry(tmp_path):
    with pytest.raises(AssetRegistryError):
        SiteAssetRegistry(tmp_path / "site-assets.json").load()


def test_load_malformed_registry(tmp_path):
    path = tmp_path / "site-assets.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(AssetRegistryError):
        SiteAssetRegistry(path).load()


def test_load_non_object_registry(tmp_path):
    path = tmp_path / "site-assets.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(AssetRegistryError):
        SiteAssetRegistry(path).load()


def test_load_non_utf8_registry(tmp_path):
    path = tmp_path / "site-assets.json"
    path.write_bytes(b"\xff\xfe{}")

    with pytest.raises(AssetRegistryError):
        SiteAssetRegistry(path).load()


@pytest.mark.parametrize(
    "content",
    [
        {"assets": ["content/property.json"]},
        {"assets": {"path": "gallery"}},
    ],
)
def test_load_invalid_assets_entries(tmp_path, content):
    path = tmp_path / "site-assets.json"
    path.write_text(json.dumps(content), encoding="utf-8")

    with pytest.raises(AssetRegistryError):
        SiteAssetRegistry(path).load()
