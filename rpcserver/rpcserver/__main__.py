"""Run the HTTP transport under uvicorn: ``python -m rpcserver``."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from rpcserver.server import create_app
from rpcserver.settings import Settings


def main() -> None:
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="JSON-RPC 2.0 server")
    parser.add_argument("--host", type=str, default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        help="Logging level",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=settings.max_workers,
        help="Threads used to run the elements of one batch",
    )
    parser.add_argument(
        "--lenient-notifications",
        action="store_true",
        help="Drop results returned by notification handlers instead of reporting Internal error",
    )
    args = parser.parse_args()

    settings.host = args.host
    settings.port = args.port
    settings.log_level = args.log_level
    settings.max_workers = args.max_workers
    if args.lenient_notifications:
        settings.strict_notifications = False

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
