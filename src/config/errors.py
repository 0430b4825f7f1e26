"""Configuration errors for Photo Sync."""

from enum import Enum


class ConfigErrorKind(Enum):
    """Category of a configuration failure."""

    INVALID_FIELD = "invalid_field"
    SOURCE_ERROR = "source_error"


class ConfigError(ValueError):
    """Exception raised when configuration cannot be loaded."""

    def __init__(self, kind: ConfigErrorKind, field: str, message: str) -> None:
        self.kind = kind
        self.field = field
        self.message = message
        super().__init__(f"Config error ({kind.value}) in {field}: {message}")
