#!/usr/bin/env python3
"""
Main CLI entry point for the Task Lists backend server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from tasklists import __version__
from tasklists.config import get_settings
from tasklists.errors import UpstreamUnavailable
from tasklists.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="tasklists")
def cli() -> None:
    """Task Lists CLI - run the server and check its dependencies."""
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind to (default: API_HOST or 0.0.0.0)")
@click.option("--port", default=None, type=int, help="Port to bind to (default: API_PORT or 4000)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Start the Task Lists API server."""
    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    configure_logging(debug=(log_level == "debug"))
    logger.info("Starting Task Lists API server", host=host, port=port, reload=reload)

    # The app reads its settings at import time
    if log_level == "debug":
        os.environ["DEBUG"] = "true"
    os.environ["LOG_LEVEL"] = log_level

    try:
        uvicorn.run(
            "tasklists.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("check-db")
def check_db() -> None:
    """Connect to the document store and ensure indexes exist."""
    from tasklists.database import close_store, connect_store

    settings = get_settings()
    configure_logging()

    async def do_check():
        store = await connect_store(settings.db_uri, settings.db_name)
        close_store(store)

    try:
        asyncio.run(do_check())
    except UpstreamUnavailable as e:
        click.echo(f"✗ Document store unavailable: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Connected to database '{settings.db_name}'")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
