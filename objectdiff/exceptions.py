"""Custom exceptions for the objectdiff engine."""


class ObjectDiffError(Exception):
    """Base exception for objectdiff errors."""
    pass


class FieldEnumerationError(ObjectDiffError):
    """Raised when a value exposes no fields that can be compared."""
    def __init__(self, value_type: type, reason: str = None):
        message = f"Cannot enumerate fields of {value_type.__qualname__}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.value_type = value_type
        self.reason = reason


class ConfigError(ObjectDiffError):
    """Raised when engine configuration is invalid."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
