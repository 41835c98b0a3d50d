"""``vitrine`` command line.

Usage:
    vitrine serve                       # components/ on http://127.0.0.1:3000
    vitrine serve --components ui/ --port 8080
    vitrine serve --no-hot-update --log-level debug
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import uvicorn

from vitrine.config import PreviewConfig
from vitrine.server.app import create_app

logger = logging.getLogger(__name__)

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vitrine", description="Vitrine component preview tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Start the component preview server")
    serve.add_argument("--port", type=int, default=3000, help="Port to listen on (default: 3000)")
    serve.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    serve.add_argument("--components", type=Path, default=None, help="Components directory")
    serve.add_argument(
        "--no-hot-update",
        dest="hot_update",
        action="store_false",
        default=None,
        help="Do not watch for changes or push reloads",
    )
    serve.add_argument("--log-level", choices=LOG_LEVELS, default="info", help="Logging level")
    return parser


def handle_serve(args: argparse.Namespace) -> int:
    config = PreviewConfig.from_env(components_dir=args.components, hot_update=args.hot_update)
    if not config.components_dir.is_dir():
        logger.error("Components directory %s does not exist", config.components_dir)
        return 1

    app = create_app(config)
    logger.info("Serving %s on http://%s:%d", config.components_dir, args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        return handle_serve(args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
