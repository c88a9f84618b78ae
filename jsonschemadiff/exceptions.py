"""Custom exceptions for json-schema-diff."""


class JsonSchemaDiffError(Exception):
    """Base exception for json-schema-diff errors."""
    pass


class SchemaError(JsonSchemaDiffError):
    """Raised when a schema is absent, unparseable or structurally unusable."""
    def __init__(self, message: str, reason: str = None):
        super().__init__(message)
        self.message = message
        self.reason = reason


class ValidationError(JsonSchemaDiffError):
    """Raised when a JSON document does not match the schema's root shape."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(JsonSchemaDiffError):
    """Raised when a configuration file cannot be used."""
    def __init__(self, message: str, key: str = None):
        super().__init__(message)
        self.message = message
        self.key = key
