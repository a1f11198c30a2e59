import json
from pathlib import Path
import logging

from .schema_core import (
    DEFAULT_MAX_DEPTH,
    InferenceContext,
    SchemaInferenceResult,
    SourceMalformedError,
    SourceUnreadableError,
)
from .type_inferrer import TypeInferrer
from .utils import CompressionHandler, is_json_sample

logger = logging.getLogger(__name__)


class JSONSchemaInferenceEngine:

    def __init__(self, max_depth=DEFAULT_MAX_DEPTH):
        self.inferrer = TypeInferrer(max_depth=max_depth)

        logger.info(f"Initialized schema inference engine (max depth {max_depth})")

    @staticmethod
    def resolve_sample_path(path) -> Path:
        """
        Turn a user-supplied path into the JSON sample file to read.

        A directory resolves to its first JSON file in name order. A path that
        does not exist gets a ".json" suffix if it lacks one.
        """
        path = Path(path)

        if path.is_dir():
            samples = sorted(
                p for p in path.iterdir() if p.is_file() and is_json_sample(p)
            )
            if not samples:
                raise SourceUnreadableError(f"No JSON files found in directory: {path}")
            logger.info(f"Using sample file {samples[0]} for directory {path}")
            return samples[0]

        if not path.exists() and path.suffix.lower() != ".json":
            return path.with_name(path.name + ".json")

        return path

    def analyze_file(self, filepath) -> SchemaInferenceResult:
        filepath = Path(filepath)

        if not filepath.exists():
            raise SourceUnreadableError(f"File not found: {filepath}")

        if not filepath.is_file():
            raise SourceUnreadableError(f"Path is not a file: {filepath}")

        try:
            text = CompressionHandler.read_text(filepath)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnreadableError(f"Cannot read {filepath}: {e}") from e

        logger.info(f"Read {len(text)} characters from {filepath}")

        return self.analyze_text(text, source=str(filepath))

    def analyze_text(self, text, source=None) -> SchemaInferenceResult:
        try:
            value = json.loads(text)
        except json.JSONDecodeError as e:
            raise SourceMalformedError(
                f"Invalid JSON in {source or 'input'}: {e}",
                source=source,
                lineno=e.lineno,
                colno=e.colno,
            ) from e
        except RecursionError as e:
            raise SourceMalformedError(
                f"Invalid JSON in {source or 'input'}: nesting too deep",
                source=source,
            ) from e

        return self.analyze_value(value, source=source)

    def analyze_value(self, value, source=None) -> SchemaInferenceResult:
        context = InferenceContext()
        schema = self.inferrer.infer(value, context)

        result = SchemaInferenceResult(
            schema=schema,
            source=source,
            metadata={
                "root_type": None,
                "cycles_detected": context.cycles_detected,
                "depth_limit_hits": context.depth_limit_hits,
                "max_depth": self.inferrer.max_depth,
                "source": source,
            },
        )
        result.metadata["root_type"] = result.root_type

        if result.is_degraded:
            logger.warning(
                f"Schema for {source or 'value'} was degraded: "
                f"{context.cycles_detected} cycle(s), "
                f"{context.depth_limit_hits} depth limit hit(s)"
            )

        logger.info(f"Inferred {result.root_type} schema for {source or 'value'}")

        return result

    def get_supported_formats(self):
        return self.inferrer.format_detector.get_supported_formats()
