"""
CLI entry point for the email hint service.

Usage:
    # Serve the HTTP API
    python -m email_hint serve --port 8080

    # Check that the employees database answers
    python -m email_hint check-db
"""

import argparse
import logging
import sys

from email_hint.core.config import ConfigurationError, Settings, load_settings
from email_hint.domain.directory.errors import StorageUnavailableError
from email_hint.infrastructure.directory.providers import build_directory_provider
from email_hint.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Start the HTTP server."""
    import uvicorn

    from email_hint.main import create_app

    host = args.host or settings.http_host
    port = args.port or settings.http_port
    app = create_app(settings)
    logger.info("Serving %s at http://%s:%d", settings.project_name, host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0


def cmd_check_db(args: argparse.Namespace, settings: Settings) -> int:
    """Ping the database through the configured provider."""
    provider = build_directory_provider(settings)
    try:
        provider.ping()
    except StorageUnavailableError as exc:
        cause = exc.__cause__
        logger.error("%s%s", exc.message, f" ({cause})" if cause else "")
        print(f"FAILED: {exc.message}")
        return 1
    finally:
        provider.close()

    print(
        f"OK: {settings.db_host}:{settings.db_port}/{settings.db_name} "
        f"({settings.storage_backend})"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="email_hint",
        description="Employee phone lookup by email prefix",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Serve the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: HTTP_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: HTTP_PORT)")
    serve_parser.set_defaults(func=cmd_serve)

    check_parser = subparsers.add_parser("check-db", help="Ping the employees database")
    check_parser.set_defaults(func=cmd_check_db)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging()
        logger.error("Failed to start: %s", exc)
        return 1

    configure_logging(level=settings.log_level)
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
