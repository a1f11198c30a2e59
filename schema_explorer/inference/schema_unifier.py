from .schema_core import SchemaType

import logging

logger = logging.getLogger(__name__)


class SchemaUnifier:
    """Summarise the fragments inferred for sibling array elements."""

    @classmethod
    def unify(cls, fragments) -> dict:
        if not fragments:
            return {}

        types = []
        for fragment in fragments:
            fragment_type = fragment.get("type")
            if fragment_type not in types:
                types.append(fragment_type)

        if len(types) > 1:
            logger.debug(f"Mixed element types {types}, falling back to anyOf")
            return {"anyOf": list(fragments)}

        if types[0] == SchemaType.OBJECT.value:
            return cls._merge_objects(fragments)

        # Known limitation: differing nested shapes (e.g. array items) are
        # not merged, the first fragment stands for all of them.
        return fragments[0]

    @staticmethod
    def _merge_objects(fragments):
        properties = {}
        required = []

        for fragment in fragments:
            # Later fragments overwrite earlier sub-schemas for the same key
            properties.update(fragment.get("properties", {}))
            for key in fragment.get("required", []):
                if key not in required:
                    required.append(key)

        return {
            "type": SchemaType.OBJECT.value,
            "properties": properties,
            "required": required,
        }


def unify_schemas(fragments):
    return SchemaUnifier.unify(fragments)
