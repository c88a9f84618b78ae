"""
json-schema-diff - Schema-annotated JSON diffing

Compares two JSON documents and reports additions, removals,
modifications and type changes, each annotated with the metadata the
JSON Schema gives for that field (type, title, format, enum). Read-only
fields are skipped, and timestamps and UUIDs are flagged as noisy.
"""

from .schema import SchemaIndex
from .comparer import TreeComparer
from .formatter import Formatter
from .models import (
    ChangeRecord,
    ChangeType,
    DiffConfig,
    FieldInfo,
    JsonKind,
    OutputFormat,
)
from .exceptions import (
    JsonSchemaDiffError,
    SchemaError,
    ValidationError,
    ConfigError,
)

__version__ = "0.1.0"
__all__ = [
    # Core
    "SchemaIndex",
    "TreeComparer",
    # Records
    "ChangeRecord",
    "ChangeType",
    "FieldInfo",
    "JsonKind",
    # Output and config
    "Formatter",
    "OutputFormat",
    "DiffConfig",
    # Errors
    "JsonSchemaDiffError",
    "SchemaError",
    "ValidationError",
    "ConfigError",
]
