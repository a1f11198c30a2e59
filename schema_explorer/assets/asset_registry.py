import json
import posixpath
from pathlib import Path
import logging

from schema_explorer.inference.schema_core import (
    AssetNotFoundError,
    AssetRegistryError,
    ComboPartMissingError,
)
from schema_explorer.inference.utils import normalize_path

logger = logging.getLogger(__name__)


class SiteAssetRegistry:
    """Read and update the schemas stored in a site-assets.json file."""

    DEFAULT_FILENAME = "site-assets.json"

    def __init__(self, path=DEFAULT_FILENAME):
        self.path = Path(path)
        self.data = None

    @property
    def assets(self):
        if self.data is None:
            self.load()
        return self.data.setdefault("assets", [])

    def load(self):
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                self.data = json.load(f)
        except OSError as e:
            raise AssetRegistryError(f"Error loading {self.path}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise AssetRegistryError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(self.data, dict):
            raise AssetRegistryError(f"{self.path} must contain a JSON object")

        assets = self.data.get("assets", [])
        if not isinstance(assets, list) or not all(isinstance(a, dict) for a in assets):
            raise AssetRegistryError(f"\"assets\" in {self.path} must be a list of objects")

        logger.info(f"Loaded {len(self.assets)} assets from {self.path}")
        return self.data

    def save(self):
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise AssetRegistryError(f"Error saving {self.path}: {e}") from e

        logger.info(f"Saved {len(self.assets)} assets to {self.path}")

    def find_asset(self, target, is_directory=False):
        """
        Locate the asset a schema belongs to.

        Returns:
            Tuple of (asset, is_combo_part). is_combo_part is True when the
            target file lives in a combo directory asset.
        """
        target = normalize_path(target)

        if is_directory:
            for asset in self.assets:
                if (
                    normalize_path(asset.get("path", "")) == target
                    and asset.get("type") == "directory"
                ):
                    return asset, False
            raise AssetNotFoundError(f"No directory asset registered for {target}")

        for asset in self.assets:
            if normalize_path(asset.get("path", "")) == target:
                return asset, False

        parent = posixpath.dirname(target)
        for asset in self.assets:
            if (
                normalize_path(asset.get("path", "")) == parent
                and asset.get("type") == "directory"
                and self._is_combo(asset)
            ):
                return asset, True

        raise AssetNotFoundError(f"No asset registered for {target}")

    def apply_schema(self, target, schema, is_directory=False):
        asset, is_combo_part = self.find_asset(target, is_directory)

        if is_combo_part or (is_directory and self._is_combo(asset)):
            json_part = self._find_json_part(asset)
            json_part["schema"] = schema
            logger.info(f"Updated schema of JSON part in combo asset {asset.get('label')}")
        else:
            asset["schema"] = schema
            logger.info(f"Updated schema of asset {asset.get('label')}")

        return asset

    @staticmethod
    def _is_combo(asset):
        contains = asset.get("contains") or {}
        return contains.get("type") == "combo"

    @staticmethod
    def _find_json_part(asset):
        for part in asset["contains"].get("parts", []):
            if part.get("assetType") == "json":
                return part
        raise ComboPartMissingError(
            f"No JSON part found in combo asset {asset.get('label', asset.get('path'))}"
        )
