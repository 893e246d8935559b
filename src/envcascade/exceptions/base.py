"""Base exception classes for envcascade.

Every error carries structured information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context (paths, tiers, underlying reason)
"""

from typing import Any, Dict, Optional


class CascadeError(Exception):
    """Base exception for all envcascade errors.

    Attributes:
        code: Machine-readable error code (e.g., "SOURCE_UNREADABLE")
        message: Human-readable error message
        details: Optional additional context for debugging
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message, and details keys.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(CascadeError):
    """Raised when launcher settings or the source list are invalid."""

    def __init__(
        self, message: str, code: str = "CONFIGURATION_ERROR", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(code=code, message=message, details=details)


class SourceUnreadableError(CascadeError):
    """Raised when an env file exists but cannot be read.

    This is a fatal startup condition: the service must not begin listening
    with a partially loaded environment.
    """

    def __init__(self, path: str, tier: int, reason: str):
        super().__init__(
            code="SOURCE_UNREADABLE",
            message=f"Cannot read env file {path}",
            details={"path": path, "tier": tier, "reason": reason},
        )
        self.path = path
        self.tier = tier
