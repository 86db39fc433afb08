"""Error types for drupal-discovery."""

from typing import Optional, Dict, Any


class DiscoveryError(Exception):
    """Base exception for discovery errors."""

    def __init__(self, message: str, code: str = "DISCOVERY_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationMissingError(DiscoveryError):
    """Required database connection parameters are absent."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIGURATION_MISSING", details=details)


class EmptyResultSetError(DiscoveryError):
    """An operation that needs at least one record received none."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="EMPTY_RESULT_SET", details=details)


class UnknownIdentifierError(DiscoveryError):
    """A table, column or literal failed validation before SQL interpolation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="UNKNOWN_IDENTIFIER", details=details)


class ReportShapeError(DiscoveryError):
    """Report rows do not share one key schema."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="REPORT_SHAPE", details=details)
