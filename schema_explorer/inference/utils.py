import gzip
import bz2
import lzma
import json
from pathlib import Path

import logging

logger = logging.getLogger(__name__)


class CompressionHandler:

    COMPRESSION_MAP = {".gz": "gzip", ".bz2": "bz2", ".xz": "xz", ".lzma": "lzma"}

    @classmethod
    def detect_compression(cls, filepath):
        suffix = filepath.suffix.lower()
        return cls.COMPRESSION_MAP.get(suffix)

    @classmethod
    def read_text(cls, filepath):
        compression = cls.detect_compression(filepath)

        try:
            if compression == "gzip":
                with gzip.open(filepath, "rt", encoding="utf-8") as f:
                    return f.read()
            elif compression == "bz2":
                with bz2.open(filepath, "rt", encoding="utf-8") as f:
                    return f.read()
            elif compression in ("xz", "lzma"):
                with lzma.open(filepath, "rt", encoding="utf-8") as f:
                    return f.read()
            else:
                with open(filepath, "r", encoding="utf-8") as f:
                    return f.read()
        except Exception as e:
            logger.error(f"Error opening file {filepath}: {e}")
            raise


def is_json_sample(filepath):
    """Match sample.json as well as compressed sample.json.gz."""
    filepath = Path(filepath)
    if CompressionHandler.detect_compression(filepath):
        filepath = filepath.with_suffix("")
    return filepath.suffix.lower() == ".json"


def normalize_path(path):
    return str(path).replace("\\", "/")


def dump_schema(schema, indent=2):
    # Fragments are built in output order; sorting keys would break it
    return json.dumps(schema, indent=indent, ensure_ascii=False)
