"""Env file source descriptors and the default tier layout.

Tiers are a declarative ordered list, so adding a tier is a list edit and
never a loader change. Layout under an installation root:

    <root>/.env.base                 tier 0, "base"
    <root>/apps/<service>/.env       tier 1, "service"

When an overrides root is configured a third tier is appended:

    <overrides_root>/.dual/.local/service/<service>/.env   tier 2, "override"
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from envcascade.exceptions import ConfigurationError

BASE_TIER = 0
SERVICE_TIER = 1
OVERRIDE_TIER = 2

KNOWN_SERVICES = ("api", "worker")

BASE_ENV_FILE = ".env.base"
SERVICE_ENV_FILE = ".env"


@dataclass(frozen=True)
class EnvFileSource:
    """One candidate env file.

    Attributes:
        path: Absolute filesystem path
        tier: Precedence rank; lower tiers are applied first and lose
        label: Name used as the provenance key in reports
    """

    path: Path
    tier: int
    label: str

    def __post_init__(self) -> None:
        # frozen dataclass: bypass __setattr__ to normalise the path
        object.__setattr__(self, "path", Path(self.path).absolute())


def default_sources(
    root: Union[Path, str],
    service: str,
    overrides_root: Optional[Union[Path, str]] = None,
) -> List[EnvFileSource]:
    """Build the ordered source list for a service.

    Args:
        root: Installation root (one level above ``apps/``)
        service: Service name, one of KNOWN_SERVICES
        overrides_root: Optional root holding ``.dual/.local`` overrides

    Returns:
        Sources ordered ascending by tier

    Raises:
        ConfigurationError: If the service name is unknown
    """
    if service not in KNOWN_SERVICES:
        raise ConfigurationError(
            f"Unknown service '{service}'. Expected one of {', '.join(KNOWN_SERVICES)}.",
            code="UNKNOWN_SERVICE",
            details={"service": service},
        )

    root_path = Path(root)
    sources = [
        EnvFileSource(root_path / BASE_ENV_FILE, BASE_TIER, "base"),
        EnvFileSource(root_path / "apps" / service / SERVICE_ENV_FILE, SERVICE_TIER, "service"),
    ]

    if overrides_root is not None:
        override_path = (
            Path(overrides_root) / ".dual" / ".local" / "service" / service / SERVICE_ENV_FILE
        )
        sources.append(EnvFileSource(override_path, OVERRIDE_TIER, "override"))

    return sources
