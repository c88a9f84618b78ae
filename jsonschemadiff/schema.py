"""Schema lookup and noisy-field detection for json-schema-diff."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

import yaml

from .models import FieldInfo
from .exceptions import SchemaError, ValidationError
from .utils import parse_path_segments, get_kind


logger = logging.getLogger(__name__)

NOISY_FORMATS = frozenset({"date-time", "date", "time", "uuid"})

_UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE
)
_TIMESTAMP_PREFIX_PATTERN = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}"
)


class SchemaIndex:
    """
    Read-only view over a JSON Schema document.

    Resolves diff paths ('user.tags[0]') to the schema node describing
    them and extracts field metadata from that node. Only `properties`
    and `items` are followed; everything else about JSON Schema
    ($ref, combinators, additionalProperties) is out of reach and simply
    resolves to an unknown field.
    """

    def __init__(self, schema: Any, validate_schema: bool = True):
        """
        Args:
            schema: Parsed schema document
            validate_schema: Check the root for minimal schema structure

        Raises:
            SchemaError: If the schema is absent or fails the structure check
        """
        if schema is None:
            raise SchemaError("Schema document is required", reason="absent")

        self.schema = schema

        if validate_schema:
            self._validate_schema_structure()

    @classmethod
    def from_file(cls, path: str | Path, validate_schema: bool = True) -> SchemaIndex:
        """
        Load a schema from a YAML or JSON file.

        Raises:
            SchemaError: If the file is missing or cannot be parsed
        """
        schema_path = Path(path)
        if not schema_path.exists():
            raise SchemaError(
                f"Schema file not found: {schema_path}",
                reason="missing"
            )

        with open(schema_path, 'r', encoding='utf-8') as f:
            content = f.read()

        try:
            schema = json.loads(content)
        except json.JSONDecodeError as e:
            if schema_path.suffix.lower() == ".json":
                raise SchemaError(f"Invalid JSON schema: {e}", reason="unparseable")
            # Not JSON; try YAML
            try:
                schema = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise SchemaError(f"Invalid schema: {e}", reason="unparseable")

        logger.debug("Loaded schema from %s", schema_path)
        return cls(schema, validate_schema=validate_schema)

    def _validate_schema_structure(self):
        if not isinstance(self.schema, dict):
            raise SchemaError("Schema must be a JSON object", reason="not an object")

        if (
            self.schema.get("type") is None
            and self.schema.get("properties") is None
            and self.schema.get("items") is None
        ):
            raise SchemaError(
                "Schema appears to be missing basic JSON Schema structure "
                "(no type, properties, or items)",
                reason="no structure"
            )

    def get_schema_for_path(self, path: str) -> Optional[dict]:
        """
        Get the schema node for a diff path.

        Args:
            path: The diff path ('' is the root)

        Returns:
            Schema node or None if the schema does not describe the path
        """
        current = self.schema

        for segment in parse_path_segments(path):
            if not isinstance(current, dict):
                return None

            if isinstance(segment, int):
                # All elements share the items schema; the index is unused
                if current.get("type") == "array" and isinstance(current.get("items"), dict):
                    current = current["items"]
                else:
                    return None
            else:
                props = current.get("properties")
                if current.get("type") == "object" and isinstance(props, dict):
                    current = props.get(segment)
                    if current is None:
                        return None
                else:
                    return None

        if not isinstance(current, dict):
            return None
        return current

    def resolve(self, path: str) -> FieldInfo:
        """
        Get field metadata for a diff path.

        Unresolvable paths are not an error; they give an empty FieldInfo.
        """
        node = self.get_schema_for_path(path)
        if node is None:
            logger.debug("No schema for path %r", path)
            return FieldInfo()

        enum = node.get("enum")
        return FieldInfo(
            type=node.get("type"),
            title=node.get("title"),
            description=node.get("description"),
            format=node.get("format"),
            enum=tuple(enum) if isinstance(enum, list) else None,
            read_only=bool(node.get("readOnly", False)),
        )

    def is_noisy(self, path: str, value: Any) -> bool:
        """
        Check whether a field is expected to change on every write.

        A field is noisy when its schema format is a timestamp or UUID
        format, or when its value looks like a UUID or an ISO-8601
        timestamp regardless of what the schema says.
        """
        if self.resolve(path).format in NOISY_FORMATS:
            return True

        if isinstance(value, str):
            if _UUID_PATTERN.fullmatch(value):
                return True
            if _TIMESTAMP_PREFIX_PATTERN.match(value):
                return True

        return False

    def validate_json(self, data: Any) -> bool:
        """
        Coarse structural check of a document against the schema root.

        Args:
            data: Parsed JSON document

        Returns:
            True if the document passes

        Raises:
            ValidationError: On root kind mismatch or missing required keys
        """
        if not isinstance(self.schema, dict):
            return True

        expected = self.schema.get("type")
        if expected == "array" and not isinstance(data, list):
            actual = get_kind(data).value
            raise ValidationError(
                f"JSON validation failed: Expected array but got {actual}",
                {"expected": "array", "actual": actual}
            )
        if expected == "object" and not isinstance(data, dict):
            actual = get_kind(data).value
            raise ValidationError(
                f"JSON validation failed: Expected object but got {actual}",
                {"expected": "object", "actual": actual}
            )

        required = self.schema.get("required")
        if isinstance(required, list) and isinstance(data, dict):
            missing = [key for key in required if key not in data]
            if missing:
                raise ValidationError(
                    f"JSON validation failed: Missing required fields: {', '.join(str(k) for k in missing)}",
                    {"missing": missing}
                )

        return True
