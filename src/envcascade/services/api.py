"""API service entry point (default port 3001)."""

import sys

from envcascade.services.runner import run_service

SERVICE_NAME = "api"


def main() -> int:
    return run_service(SERVICE_NAME)


if __name__ == "__main__":
    sys.exit(main())
