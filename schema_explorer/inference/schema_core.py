from enum import Enum
from dataclasses import dataclass, field


DEFAULT_MAX_DEPTH = 128


class SchemaType(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class StringFormat(Enum):
    URI = "uri"
    EMAIL = "email"
    DATE = "date"
    DATE_TIME = "date-time"


class SchemaSourceError(Exception):
    """Base class for failures reading a JSON sample."""


class SourceUnreadableError(SchemaSourceError):
    pass


class SourceMalformedError(SchemaSourceError):
    def __init__(self, message, source=None, lineno=None, colno=None):
        super().__init__(message)
        self.source = source
        self.lineno = lineno
        self.colno = colno


class AssetRegistryError(Exception):
    pass


class AssetNotFoundError(AssetRegistryError):
    pass


class ComboPartMissingError(AssetRegistryError):
    pass


@dataclass
class InferenceContext:
    """State for a single top-level inference call."""

    visiting: set = field(default_factory=set)
    cycles_detected: int = 0
    depth_limit_hits: int = 0

    @property
    def depth(self):
        return len(self.visiting)

    def enter(self, value):
        self.visiting.add(id(value))

    def leave(self, value):
        self.visiting.discard(id(value))

    def is_visiting(self, value):
        return id(value) in self.visiting


@dataclass
class SchemaInferenceResult:

    schema: dict
    source: str = None
    metadata: dict = field(default_factory=dict)

    @property
    def root_type(self):
        if "anyOf" in self.schema:
            return "anyOf"
        return self.schema.get("type")

    @property
    def is_degraded(self):
        return bool(
            self.metadata.get("cycles_detected")
            or self.metadata.get("depth_limit_hits")
        )
