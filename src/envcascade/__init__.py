"""envcascade - layered .env loading for the api and worker services.

This package provides:
- config: Env cascade loader, source layout, effective environment store, settings
- services: The api and worker HTTP services
- web: Starlette app factory, request logging and health routes
- logger: Structured logging with text or JSON output
- exceptions: Structured exception classes
"""

__version__ = "1.0.0"

from envcascade.config import (
    CascadeResult,
    EnvCascadeLoader,
    EnvFileSource,
    EnvStore,
    LauncherSettings,
    ParsedEnvFile,
    ServerSettings,
    default_sources,
)
from envcascade.exceptions import (
    CascadeError,
    ConfigurationError,
    SourceUnreadableError,
)
from envcascade.logger import (
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
)

__all__ = [
    "__version__",
    # Config
    "CascadeResult",
    "EnvCascadeLoader",
    "EnvFileSource",
    "EnvStore",
    "LauncherSettings",
    "ParsedEnvFile",
    "ServerSettings",
    "default_sources",
    # Exceptions
    "CascadeError",
    "ConfigurationError",
    "SourceUnreadableError",
    # Logger
    "Logger",
    "StructuredLogger",
    "create_logger",
    "get_logger",
]
