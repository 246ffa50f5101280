#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SQLite Web GUI

Usage:
  sqlite-webgui [--port PORT] [--host HOST] [--writable | --read-only] [--no-browser] <database.db>

Notes:
- Read-only by default: the file is opened with mode=ro and the row write
  endpoints are not registered.
- --writable enables insert/update/delete and write statements in the query box;
  --read-only forces read-only even when config.yaml or the environment say writable.
- Settings may also come from config.yaml or SQLITE_WEBGUI_* environment variables.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
import webbrowser

from .config import load_settings
from .db import Database
from .errors import DatabaseConnectionError
from .logs import configure_logging

logger = logging.getLogger(__name__)

EXAMPLES = """
Examples:
  sqlite-webgui mydata.db                  # Read-only mode (safe)
  sqlite-webgui --writable mydata.db       # Enable write operations
  sqlite-webgui --port 3000 mydata.db      # Custom port, read-only
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlite-webgui",
        description="Browse and edit a SQLite database in your web browser",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("database", nargs="?", help="path to an existing SQLite database file")
    parser.add_argument("--port", type=int, default=None, help="port to run the server on (default: 8080)")
    parser.add_argument("--host", default=None, help="interface to bind (default: 127.0.0.1)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--writable",
        action="store_true",
        default=None,
        help="enable write operations (default: read-only mode)",
    )
    mode.add_argument(
        "--read-only",
        dest="writable",
        action="store_false",
        default=None,
        help="force read-only mode, overriding config.yaml and the environment",
    )
    parser.add_argument(
        "--no-browser",
        dest="open_browser",
        action="store_false",
        default=None,
        help="do not open a browser window on start",
    )
    parser.add_argument("--config", default=None, help="path to config.yaml")
    parser.add_argument("--log-level", default=None, help="logging level (default: INFO)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(
        args.config,
        db_path=args.database,
        port=args.port,
        host=args.host,
        writable=args.writable,
        open_browser=args.open_browser,
        log_level=args.log_level,
    )
    configure_logging(settings.log_level)

    if not settings.db_path:
        parser.print_usage(sys.stderr)
        print(EXAMPLES, file=sys.stderr)
        return 1
    if not os.path.isfile(settings.db_path):
        print(f"Database file does not exist: {settings.db_path}", file=sys.stderr)
        return 1

    try:
        db = Database(settings.db_path, readonly=settings.readonly, foreign_keys=settings.foreign_keys)
    except DatabaseConnectionError as e:
        print(f"Failed to open database: {e}", file=sys.stderr)
        return 1

    import uvicorn
    from .api import create_app

    app = create_app(db)
    url = f"http://{'localhost' if settings.host in ('127.0.0.1', '0.0.0.0') else settings.host}:{settings.port}"
    print("\nSQLite Web GUI is running!")
    print(f"Database: {settings.db_path}")
    print(f"Mode: {'READ-WRITE' if settings.writable else 'READ-ONLY'}")
    print(f"Open your browser: {url}\n")

    if settings.open_browser:
        try:
            if not webbrowser.open(url):
                logger.warning("no browser available; open %s manually", url)
        except webbrowser.Error as e:
            logger.warning("failed to open browser automatically: %s", e)

    try:
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
