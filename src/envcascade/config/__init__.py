"""Configuration module for envcascade.

Example:
    from envcascade.config import EnvCascadeLoader, EnvStore, default_sources

    store = EnvStore.from_environ()
    result = EnvCascadeLoader(store).load(default_sources("/srv/app", "api"))
    result.get("DATABASE_URL")
"""

from envcascade.config.env_loader import (
    CascadeResult,
    EnvCascadeLoader,
    ParsedEnvFile,
    decode_values,
    parse_env_text,
)
from envcascade.config.settings import (
    DEFAULT_PORTS,
    LauncherSettings,
    ServerSettings,
)
from envcascade.config.sources import (
    BASE_TIER,
    KNOWN_SERVICES,
    OVERRIDE_TIER,
    SERVICE_TIER,
    EnvFileSource,
    default_sources,
)
from envcascade.config.store import EnvStore

__all__ = [
    # Loader
    "CascadeResult",
    "EnvCascadeLoader",
    "ParsedEnvFile",
    "decode_values",
    "parse_env_text",
    # Store
    "EnvStore",
    # Sources
    "EnvFileSource",
    "default_sources",
    "BASE_TIER",
    "SERVICE_TIER",
    "OVERRIDE_TIER",
    "KNOWN_SERVICES",
    # Settings
    "LauncherSettings",
    "ServerSettings",
    "DEFAULT_PORTS",
]
