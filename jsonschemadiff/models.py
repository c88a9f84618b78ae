"""Data models for json-schema-diff."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml

from .exceptions import ConfigError


class ChangeType(Enum):
    ADDITION = "addition"
    REMOVAL = "removal"
    MODIFICATION = "modification"
    TYPE_CHANGE = "type_change"


class JsonKind(Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


class OutputFormat(Enum):
    PRETTY = "pretty"
    JSON = "json"


@dataclass(frozen=True)
class FieldInfo:
    """Schema metadata for a single path. All fields absent means unknown."""
    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    format: Optional[str] = None
    enum: Optional[tuple] = None
    read_only: bool = False

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "format": self.format,
            "enum": list(self.enum) if self.enum is not None else None,
            "read_only": self.read_only,
        }


@dataclass(frozen=True)
class ChangeRecord:
    """A single difference found during comparison."""
    path: str
    old_value: Any
    new_value: Any
    change_type: ChangeType
    field_info: FieldInfo = field(default_factory=FieldInfo)
    is_noisy: bool = False

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "change_type": self.change_type.value,
            "old_value": self.old_value,
            "new_value": self.new_value,
            "field_info": self.field_info.to_dict(),
            "is_noisy": self.is_noisy,
        }


@dataclass
class DiffConfig:
    """Configuration for a diff run."""
    ignore_fields: list[str] = field(default_factory=list)
    validate_schema: bool = True
    validate_json: bool = False
    output_format: OutputFormat = OutputFormat.PRETTY
    use_color: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: dict) -> DiffConfig:
        """
        Build a config from a plain mapping, e.g. a parsed YAML file.

        Args:
            data: Mapping of config keys to values

        Returns:
            DiffConfig with defaults for missing keys
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                raise ConfigError(f"Unknown configuration key: {key}", key=key)
            values[key] = value

        if "ignore_fields" in values:
            ignore = values["ignore_fields"]
            if ignore is None:
                ignore = []
            elif isinstance(ignore, str):
                ignore = [p.strip() for p in ignore.split(",") if p.strip()]
            elif not isinstance(ignore, list):
                raise ConfigError(
                    f"ignore_fields must be a list or a comma-separated string, "
                    f"got {type(ignore).__name__}",
                    key="ignore_fields"
                )
            values["ignore_fields"] = [str(p) for p in ignore]

        for key in ("validate_schema", "validate_json", "use_color"):
            if key in values and not isinstance(values[key], bool):
                raise ConfigError(f"{key} must be true or false", key=key)

        if "output_format" in values:
            try:
                values["output_format"] = OutputFormat(values["output_format"])
            except ValueError:
                raise ConfigError(
                    f"Invalid output_format: {values['output_format']}",
                    key="output_format"
                )

        if "log_level" in values:
            values["log_level"] = str(values["log_level"]).upper()

        return cls(**values)

    @classmethod
    def from_file(cls, path: str | Path) -> DiffConfig:
        """Load configuration from a YAML (or JSON) file."""
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            content = f.read()

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file: {e}")

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping")

        return cls.from_dict(data)
