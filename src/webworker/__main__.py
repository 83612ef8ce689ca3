"""
=============================================================================
WEBWORKER CLI ENTRY POINT
=============================================================================

    # Serve the current directory on localhost:8080
    python -m webworker

    # Serve ./www on all interfaces, port 3000
    python -m webworker --root ./www --host 0.0.0.0 --port 3000

    # Give up on clients that send nothing for 10 seconds
    python -m webworker --timeout 10

    # Refuse to buffer request heads larger than 8 KB
    python -m webworker --max-header-bytes 8192

Flags override WEBWORKER_* environment variables, which override defaults.

=============================================================================
"""

import argparse
import logging
import sys

from . import __version__
from .config import ServerConfig
from .logs import setup_logging
from .server import WebServer


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webworker",
        description="Minimal one-request-per-connection HTTP server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m webworker                         # Serve . on 127.0.0.1:8080
  python -m webworker --root ./www            # Serve another directory
  python -m webworker --host 0.0.0.0 -p 3000  # All interfaces, port 3000
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 127.0.0.1)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: 8080)"
    )

    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Read timeout in seconds for the request head (default: none)"
    )

    parser.add_argument(
        "--max-header-bytes",
        type=int,
        default=None,
        help="Stop reading the request head after this many bytes (default: no limit)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--root", "-r",
        default=None,
        help="Directory to serve files from (default: current directory)"
    )

    parser.add_argument(
        "--server-name",
        default=None,
        help="Value of the Server header (default: WebWorker/1.0)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # META ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"WebWorker {__version__}"
    )

    return parser


def build_config(args: argparse.Namespace) -> ServerConfig:
    """Environment-based config with CLI flags layered on top."""
    config = ServerConfig.from_env()

    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.timeout is not None:
        config.read_timeout = args.timeout
    if args.max_header_bytes is not None:
        config.max_header_bytes = args.max_header_bytes
    if args.root is not None:
        config.root = args.root
    if args.server_name is not None:
        config.server_name = args.server_name
    if args.log_level is not None:
        config.log_level = args.log_level

    return config


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = build_config(args)
        config.validate()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level)

    try:
        WebServer(config).run()
    except OSError as e:
        logger.error(f"Server failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
