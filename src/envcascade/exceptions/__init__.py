"""Exceptions for envcascade.

Usage:
    from envcascade.exceptions import (
        CascadeError,
        ConfigurationError,
        SourceUnreadableError,
    )

A missing env file or a malformed line is never an error. Only a file that
exists but cannot be read surfaces as SourceUnreadableError.
"""

from envcascade.exceptions.base import (
    CascadeError,
    ConfigurationError,
    SourceUnreadableError,
)

__all__ = [
    "CascadeError",
    "ConfigurationError",
    "SourceUnreadableError",
]
