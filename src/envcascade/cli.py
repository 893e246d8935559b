"""Command line interface for envcascade.

USAGE:
    envcascade serve <service> [--host HOST] [--port PORT] [--root DIR] [--overrides-root DIR]
    envcascade show <service> [--root DIR] [--overrides-root DIR] [--raw]

ENVIRONMENT:
    ENVCASCADE_ROOT            Installation root (default: cwd)
    ENVCASCADE_OVERRIDES_ROOT  Root holding .dual/.local overrides
    ENVCASCADE_DECODE_VALUES   "false" to apply values literally (default: true)
    ENVCASCADE_LOG_LEVEL       Logging level
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from envcascade.config import KNOWN_SERVICES, LauncherSettings
from envcascade.exceptions import CascadeError
from envcascade.logger import create_logger
from envcascade.services.app import WATCHED_VARIABLES
from envcascade.services.runner import load_environment, run_service


def cmd_serve(args: argparse.Namespace) -> int:
    return run_service(
        args.service,
        host=args.host,
        port=args.port,
        root=args.root,
        overrides_root=args.overrides_root,
    )


def cmd_show(args: argparse.Namespace) -> int:
    """Print provenance and resolved variables without starting a server."""
    launcher = LauncherSettings.from_env()
    if args.root is not None:
        launcher.root = args.root
    if args.overrides_root is not None:
        launcher.overrides_root = args.overrides_root
    if args.raw:
        launcher.decode_values = False

    # stdout carries the JSON report; only warnings may interleave
    logger = create_logger(f"envcascade-{args.service}", level=logging.WARNING)
    try:
        result = load_environment(args.service, launcher, logger=logger)
    except CascadeError as exc:
        print(json.dumps({"error": exc.to_dict()}, indent=2), file=sys.stderr)
        return 1

    output = {
        "service": args.service,
        "sources": result.describe_sources(),
        "environment": {name: result.get(name) for name in WATCHED_VARIABLES},
    }
    print(json.dumps(output, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envcascade",
        description="Run the api/worker services or inspect their env cascade",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES:
  Start the api service on its default port:
    %(prog)s serve api

  Show which env file defined which variable for the worker:
    %(prog)s show worker --root /srv/app
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Start a service")
    serve.add_argument("service", choices=KNOWN_SERVICES)
    serve.add_argument("--host", default=None, help="Bind address (default: ENVCASCADE_HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, default=None, help="Listen port (overrides PORT)")
    serve.set_defaults(func=cmd_serve)

    show = subparsers.add_parser("show", help="Print env provenance as JSON")
    show.add_argument("service", choices=KNOWN_SERVICES)
    show.add_argument("--raw", action="store_true", help="Apply values literally, quotes included")
    show.set_defaults(func=cmd_show)

    for sub in (serve, show):
        sub.add_argument("--root", type=Path, default=None, help="Installation root")
        sub.add_argument(
            "--overrides-root",
            type=Path,
            default=None,
            help="Root holding .dual/.local overrides (default: ENVCASCADE_OVERRIDES_ROOT)",
        )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
