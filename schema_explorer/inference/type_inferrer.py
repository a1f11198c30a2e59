from collections.abc import Mapping

from .schema_core import SchemaType, InferenceContext, DEFAULT_MAX_DEPTH
from .format_detector import StringFormatDetector
from .schema_unifier import SchemaUnifier

import logging

logger = logging.getLogger(__name__)


class TypeInferrer:

    def __init__(self, max_depth=DEFAULT_MAX_DEPTH, format_detector=None):
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.max_depth = max_depth
        self.format_detector = format_detector or StringFormatDetector
        self.unifier = SchemaUnifier

    def infer(self, value, context=None) -> dict:
        """
        Map a JSON value to a schema fragment.

        Args:
            value: Parsed JSON value, or a live object graph built from
                dicts, lists and primitives
            context: InferenceContext for the current top-level call. A fresh
                one is created when omitted; never share one between calls.

        Returns:
            Schema fragment as a dict in output key order
        """
        if context is None:
            context = InferenceContext()

        if value is None:
            return {"type": SchemaType.NULL.value}

        if isinstance(value, (list, tuple)):
            return self._infer_array(value, context)

        if isinstance(value, Mapping):
            return self._infer_object(value, context)

        if isinstance(value, str):
            return self._infer_string(value)

        # bool is a subclass of int, check it first
        if isinstance(value, bool):
            return {"type": SchemaType.BOOLEAN.value}

        if isinstance(value, (int, float)):
            return {"type": self._number_type(value)}

        logger.debug(f"Unsupported value of type {type(value).__name__}, using string")
        return {"type": SchemaType.STRING.value}

    def _infer_array(self, value, context):
        if not value:
            return {"type": SchemaType.ARRAY.value, "items": {}}

        if not self._can_descend(value, context):
            return {"type": SchemaType.ARRAY.value}

        context.enter(value)
        try:
            item_schemas = [self.infer(item, context) for item in value]
        finally:
            context.leave(value)

        return {
            "type": SchemaType.ARRAY.value,
            "items": self.unifier.unify(item_schemas),
        }

    def _infer_object(self, value, context):
        if not self._can_descend(value, context):
            return {"type": SchemaType.OBJECT.value}

        context.enter(value)
        properties = {}
        required = []
        try:
            for key, item in value.items():
                key = str(key)
                properties[key] = self.infer(item, context)
                if key not in required:
                    required.append(key)
        finally:
            context.leave(value)

        return {
            "type": SchemaType.OBJECT.value,
            "properties": properties,
            "required": required,
        }

    def _can_descend(self, value, context):
        if context.is_visiting(value):
            context.cycles_detected += 1
            logger.debug(f"Cycle detected at depth {context.depth}, not descending")
            return False

        if context.depth >= self.max_depth:
            context.depth_limit_hits += 1
            logger.debug(f"Maximum depth {self.max_depth} reached, not descending")
            return False

        return True

    def _infer_string(self, value):
        schema = {"type": SchemaType.STRING.value}
        string_format = self.format_detector.detect_format(value)
        if string_format:
            schema["format"] = string_format
        return schema

    @staticmethod
    def _number_type(value):
        if isinstance(value, int) or value.is_integer():
            return SchemaType.INTEGER.value
        return SchemaType.NUMBER.value


def infer_schema(value, max_depth=DEFAULT_MAX_DEPTH):
    return TypeInferrer(max_depth=max_depth).infer(value)
