"""
NoteCache Backend — Command-Line Entry Point
==============================================

What:  `notecache -h HOST -p PORT -c CACHE_DIR` starts the HTTP service.
How:   argparse → Settings → cache directory check → create_app → uvicorn.run.

All three options are required. `-h` means --host, so help is only
available as --help.

Exit codes:
    0  clean shutdown
    1  cache directory does not exist
    2  bad or missing arguments (argparse)
"""

import argparse
import logging
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from notecache.config import Settings
from notecache.exceptions import ConfigurationError
from notecache.main import create_app, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notecache",
        description="Serve text notes stored as files in a directory.",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument("-h", "--host", required=True, help="address to bind")
    parser.add_argument("-p", "--port", required=True, type=int, help="port to bind")
    parser.add_argument(
        "-c", "--cache", required=True, help="directory holding the note files (must exist)"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)",
    )
    return parser


def parse_settings(argv: Optional[List[str]] = None) -> Settings:
    """Parse command-line arguments into validated Settings."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return Settings(
            host=args.host,
            port=args.port,
            cache=args.cache,
            log_level=args.log_level,
        )
    except ValidationError as e:
        # Reported like any other argparse error: usage + exit status 2
        parser.error(str(e))


def main(argv: Optional[List[str]] = None) -> int:
    app_settings = parse_settings(argv)
    setup_logging(app_settings.log_level)

    app = create_app(app_settings)
    try:
        app.state.note_store.check()
    except ConfigurationError as e:
        logger.error("Error: %s", e.message)
        return 1

    uvicorn.run(
        app,
        host=app_settings.host,
        port=app_settings.port,
        log_level=app_settings.log_level.lower(),
    )
    return 0
