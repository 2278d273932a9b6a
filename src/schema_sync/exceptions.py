"""Custom exceptions for schema sync."""


class SchemaSyncError(Exception):
    """Base exception for all schema sync errors."""

    pass


class ConnectionError(SchemaSyncError):
    """Error establishing database connection."""

    pass


class ConfigurationError(SchemaSyncError):
    """Error in configuration or parameters."""

    pass


class InvalidArgumentError(SchemaSyncError, ValueError):
    """A required identifier or collection was missing."""

    def __init__(self, param: str, message: str = ""):
        self.param = param
        super().__init__(message or f"Argument '{param}' is required")
