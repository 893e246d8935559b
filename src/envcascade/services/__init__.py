"""The api and worker services.

Both services are identical apart from their name and default port.
"""

from envcascade.services.app import (
    WATCHED_VARIABLES,
    build_root_response,
    create_service_app,
)
from envcascade.services.runner import (
    fingerprint,
    load_environment,
    log_startup,
    run_service,
)

__all__ = [
    "WATCHED_VARIABLES",
    "build_root_response",
    "create_service_app",
    "fingerprint",
    "load_environment",
    "log_startup",
    "run_service",
]
