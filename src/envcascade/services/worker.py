"""Worker service entry point (default port 3002)."""

import sys

from envcascade.services.runner import run_service

SERVICE_NAME = "worker"


def main() -> int:
    return run_service(SERVICE_NAME)


if __name__ == "__main__":
    sys.exit(main())
