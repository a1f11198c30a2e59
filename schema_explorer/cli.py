#!/usr/bin/env python3

"""
cli.py

Entry point for the generate-schema command: infer a JSON Schema from a
sample file and store it on the matching entry of site-assets.json.
"""

import argparse
import logging
import sys
from pathlib import Path

from .inference.inference_engine import JSONSchemaInferenceEngine
from .inference.schema_core import (
    DEFAULT_MAX_DEPTH,
    AssetNotFoundError,
    AssetRegistryError,
    SchemaSourceError,
)
from .inference.utils import dump_schema, normalize_path
from .assets.asset_registry import SiteAssetRegistry

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="generate-schema",
        description="Infer a JSON Schema from a sample JSON file or directory.",
        epilog=(
            "examples:\n"
            "  generate-schema content/property.json\n"
            "  generate-schema gallery\n"
            "  generate-schema gallery/some-file.json"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", help="JSON file, or directory holding a JSON sample")
    parser.add_argument(
        "--assets",
        default=SiteAssetRegistry.DEFAULT_FILENAME,
        help="asset registry to update (default: %(default)s)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help="nesting depth after which containers are not descended into",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="print the schema without touching the asset registry",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def run(args) -> int:
    input_path = Path(args.path)
    is_directory = input_path.is_dir()

    try:
        engine = JSONSchemaInferenceEngine(max_depth=args.max_depth)
        sample_path = engine.resolve_sample_path(input_path)
        if not args.stdout:
            if is_directory:
                print(f"Using sample file: {normalize_path(sample_path)}")
            print(f"Generating schema for: {normalize_path(sample_path)}\n")
        result = engine.analyze_file(sample_path)
    except (SchemaSourceError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    schema_json = dump_schema(result.schema)

    if args.stdout:
        print(schema_json)
        return 0

    target = input_path if is_directory else sample_path
    registry = SiteAssetRegistry(args.assets)

    try:
        registry.load()
        asset = registry.apply_schema(target, result.schema, is_directory=is_directory)
    except AssetNotFoundError:
        print(f"Warning: Asset not found in {args.assets}", file=sys.stderr)
        print("The schema will be output to stdout instead.\n", file=sys.stderr)
        print(schema_json)
        return 0
    except AssetRegistryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        registry.save()
    except AssetRegistryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Schema updated for asset: {asset.get('label', normalize_path(target))}")
    print("\nSchema preview:")
    print(schema_json)
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
