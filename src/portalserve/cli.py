"""``portalserve`` console entry point.

There are no subcommands: invoking it starts serving immediately.

Entry point registered in ``pyproject.toml``::

    [project.scripts]
    portalserve = "portalserve.cli:main"
"""

import argparse
import logging
import sys
from dataclasses import replace

from portalserve.config import AppConfig
from portalserve.errors import ConfigurationError
from portalserve.portal import create_app
from portalserve.server.banner import discover_pages, format_banner

logger = logging.getLogger("portalserve.server")

_LOG_LEVELS = ("debug", "info", "warning", "error")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portalserve",
        description="Serve the admin portal frontend with clean (extensionless) URLs.",
    )
    parser.add_argument("--host", default=None, help="Bind host address")
    parser.add_argument("--port", type=int, default=None, help="Bind port number (default 8080)")
    parser.add_argument("--root", default=None, help="Site root containing assets/ and pages/")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Single worker with auto-reload",
    )
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default=None,
        help="Log level (default info)",
    )
    parser.add_argument(
        "--no-access-log",
        action="store_true",
        help="Disable per-request access logging",
    )
    return parser


def config_from_args(args: argparse.Namespace, base: AppConfig | None = None) -> AppConfig:
    """Apply CLI overrides on top of *base* (defaults when omitted)."""
    config = base or AppConfig()
    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.root is not None:
        overrides["root_dir"] = args.root
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.debug:
        overrides["debug"] = True
    if args.no_access_log:
        overrides["access_log"] = False
    return replace(config, **overrides)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``portalserve`` command."""
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        app = create_app(config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    logger.info("Listening on port %d\n%s", config.port, format_banner(config, discover_pages(config)))
    app.run()
