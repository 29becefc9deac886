from __future__ import annotations


class StringSetError(Exception):
    """Base class for errors raised by this package."""


class NotAStringError(StringSetError, TypeError):
    """Raised when a value passed to a set operation is not a ``str``."""

    def __init__(
        self, operation: str, position: int, value: object, message: str | None = None
    ) -> None:
        self.operation = operation
        self.position = position
        self.value = value
        super().__init__(
            message
            or f"{operation}() accepts only str values; argument {position} is {type(value).__name__}"
        )


class ConfigError(StringSetError, ValueError):
    """Raised when a config file cannot be turned into settings."""


__all__ = [
    "ConfigError",
    "NotAStringError",
    "StringSetError",
]
