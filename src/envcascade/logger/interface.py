"""
Logger interface for envcascade services.

The loader, runner and HTTP middleware only depend on this contract, so tests
can pass in any implementation.
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Abstract logging contract.

    Keyword arguments are structured fields attached to the record
    (e.g. ``logger.info("Loaded env file", tier=0, variables=3)``).
    """

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message."""

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message."""

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message."""

    @abstractmethod
    def get_session_id(self) -> str:
        """Return the identifier shared by every record of this process."""
