"""Service startup: load the env cascade, log it, then serve.

Startup order:
    1. Read LauncherSettings from the inherited environment
    2. Load the cascade into an EnvStore (fatal on unreadable files)
    3. Resolve ServerSettings (PORT) from the effective environment
    4. Log the resolved variables and start uvicorn
"""

import hashlib
import logging
from pathlib import Path
from typing import Mapping, Optional

import uvicorn

from envcascade.config import (
    CascadeResult,
    EnvCascadeLoader,
    EnvStore,
    LauncherSettings,
    ServerSettings,
    default_sources,
)
from envcascade.exceptions import CascadeError
from envcascade.logger import Logger, create_logger
from envcascade.services.app import WATCHED_VARIABLES, create_service_app

# Logged as a fingerprint, never in clear text
SECRET_VARIABLES = frozenset({"API_KEY"})

_UVICORN_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def fingerprint(value: Optional[str]) -> str:
    """SHA256 fingerprint of a secret for logging (first 12 hex chars)."""
    if not value:
        return "none"
    return f"sha256:{hashlib.sha256(value.encode()).hexdigest()[:12]}"


def service_logger(service: str, launcher: LauncherSettings) -> Logger:
    level = getattr(logging, launcher.log_level, logging.INFO)
    return create_logger(f"envcascade-{service}", level=level, json_format=launcher.log_json)


def load_environment(
    service: str,
    launcher: LauncherSettings,
    environ: Optional[Mapping[str, str]] = None,
    logger: Optional[Logger] = None,
) -> CascadeResult:
    """Load the env cascade for ``service`` on top of ``environ``.

    Raises:
        CascadeError: On an unknown service or an unreadable env file
    """
    sources = default_sources(launcher.root, service, overrides_root=launcher.overrides_root)
    loader = EnvCascadeLoader(
        EnvStore.from_environ(environ),
        decode=launcher.decode_values,
        logger=logger,
    )
    return loader.load(sources)


def log_startup(logger: Logger, result: CascadeResult, settings: ServerSettings) -> None:
    """Log provenance and every watched variable."""
    for label, names in result.provenance().items():
        logger.info("Env source", source=label, variables=",".join(names) or "-")

    logger.info("Environment variables", port=settings.port)
    for name in WATCHED_VARIABLES:
        value = result.get(name)
        if name in SECRET_VARIABLES:
            value = fingerprint(value)
        logger.info(f"{name}: {value}")


def run_service(
    service: str,
    environ: Optional[Mapping[str, str]] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
    root: Optional[Path] = None,
    overrides_root: Optional[Path] = None,
) -> int:
    """Start ``service`` and block until the server exits.

    Args:
        service: "api" or "worker"
        environ: Inherited environment (default: os.environ)
        host: Bind address override
        port: Port override (takes precedence over PORT)
        root: Installation root override
        overrides_root: Overrides root (takes precedence over ENVCASCADE_OVERRIDES_ROOT)

    Returns:
        Process exit code
    """
    launcher = LauncherSettings.from_env(environ)
    if root is not None:
        launcher.root = Path(root)
    if overrides_root is not None:
        launcher.overrides_root = Path(overrides_root)
    if host is not None:
        launcher.host = host

    logger = service_logger(service, launcher)
    logger.info(f"{service.capitalize()} service starting", root=str(launcher.root))

    try:
        result = load_environment(service, launcher, environ=environ, logger=logger)
        settings = ServerSettings.from_env(service, result.store, host=launcher.host)
    except CascadeError as exc:
        logger.error(f"Startup failed: {exc.message}", code=exc.code, details=exc.details)
        return 1

    if port is not None:
        settings.port = port

    log_startup(logger, result, settings)

    app = create_service_app(result, settings, logger=logger)
    logger.info(
        f"{service.capitalize()} service listening",
        url=f"http://localhost:{settings.port}/",
    )

    uvicorn_level = launcher.log_level.lower()
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=uvicorn_level if uvicorn_level in _UVICORN_LEVELS else "info",
    )
    return 0
