"""Dataclass settings for the envcascade services.

Two stages, matching the startup order:

- LauncherSettings is read from the inherited environment *before* the
  cascade runs. It says where the env files live and how to log.
- ServerSettings is read from the effective environment *after* the cascade,
  so a ``PORT`` defined in an env file takes effect.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from envcascade.exceptions import ConfigurationError

ENV_PREFIX = "ENVCASCADE"

DEFAULT_PORTS: Dict[str, int] = {
    "api": 3001,
    "worker": 3002,
}


def _parse_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def _parse_port(value: str, name: str) -> int:
    """Convert a string to a TCP port, raising a clear error when invalid."""
    try:
        port = int(value)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be an integer, got {value!r}",
            code="INVALID_PORT",
            details={"variable": name, "value": value},
        ) from exc
    if not 0 < port < 65536:
        raise ConfigurationError(
            f"{name} must be between 1 and 65535, got {port}",
            code="INVALID_PORT",
            details={"variable": name, "value": value},
        )
    return port


@dataclass
class LauncherSettings:
    """Where to find env files and how to log.

    Attributes:
        root: Installation root holding ``.env.base`` and ``apps/``
        overrides_root: Optional root holding ``.dual/.local`` overrides
        decode_values: Decode quoted values with python-dotenv (False keeps them literal)
        host: Server bind address
        log_level: Logging level name
        log_json: Emit JSON log lines
    """

    root: Path = field(default_factory=Path.cwd)
    overrides_root: Optional[Path] = None
    decode_values: bool = True
    host: str = "0.0.0.0"
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        if self.overrides_root is not None:
            self.overrides_root = Path(self.overrides_root)
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        prefix: str = ENV_PREFIX,
    ) -> "LauncherSettings":
        """Load launcher settings.

        Environment variables:
            {prefix}_ROOT: Installation root (default: cwd)
            {prefix}_OVERRIDES_ROOT: Overrides root (default: unset)
            {prefix}_DECODE_VALUES: "false" to apply literal values (default: true)
            {prefix}_HOST: Bind address
            {prefix}_LOG_LEVEL: Logging level
            {prefix}_LOG_JSON: "true" for JSON logs
        """
        env = os.environ if env is None else env

        root = env.get(f"{prefix}_ROOT")
        overrides_root = env.get(f"{prefix}_OVERRIDES_ROOT")

        return cls(
            root=Path(root) if root else Path.cwd(),
            overrides_root=Path(overrides_root) if overrides_root else None,
            decode_values=_parse_bool(env.get(f"{prefix}_DECODE_VALUES", "true")),
            host=env.get(f"{prefix}_HOST", "0.0.0.0"),
            log_level=env.get(f"{prefix}_LOG_LEVEL", "INFO"),
            log_json=_parse_bool(env.get(f"{prefix}_LOG_JSON")),
        )


@dataclass
class ServerSettings:
    """Network settings for one service.

    Attributes:
        service: Service name ("api" or "worker")
        host: Bind address
        port: Listen port
    """

    service: str
    host: str = "0.0.0.0"
    port: int = 3001

    @classmethod
    def from_env(
        cls,
        service: str,
        env: Mapping[str, str],
        host: str = "0.0.0.0",
    ) -> "ServerSettings":
        """Resolve the listen port from ``PORT`` in the effective environment.

        Falls back to the service's default port when ``PORT`` is unset or empty.
        """
        if service not in DEFAULT_PORTS:
            raise ConfigurationError(
                f"No default port for service '{service}'",
                code="UNKNOWN_SERVICE",
                details={"service": service},
            )

        port_value = env.get("PORT")
        port = _parse_port(port_value, "PORT") if port_value else DEFAULT_PORTS[service]
        return cls(service=service, host=host, port=port)
