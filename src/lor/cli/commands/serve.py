"""
LOR API server command.

Usage:
    lor serve                   # Start API server with default settings
    lor serve --host 0.0.0.0    # Bind to all interfaces
    lor serve --reload          # Enable auto-reload (development)
"""

import click
from loguru import logger


@click.command("serve")
@click.option("--host", default=None, help="Host to bind to (overrides config/env)")
@click.option("--port", default=None, type=int, help="Port to listen on (overrides config/env)")
@click.option("--reload", is_flag=True, default=None, help="Enable auto-reload for development")
@click.option("--workers", default=None, type=int, help="Number of worker processes")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["critical", "error", "warning", "info", "debug", "trace"]),
    help="Logging level",
)
def serve_command(
    host: str | None,
    port: int | None,
    reload: bool | None,
    workers: int | None,
    log_level: str | None,
):
    """Start the LOR API server."""
    import uvicorn

    from lor.settings import settings

    uvicorn_config = {
        "app": "lor.api.main:create_app",
        "factory": True,
        "host": host or settings.api.host,
        "port": port or settings.api.port,
        "log_level": log_level or settings.api.log_level,
        "reload": reload if reload is not None else settings.api.reload,
    }
    if not uvicorn_config["reload"]:
        uvicorn_config["workers"] = workers or settings.api.workers

    logger.info(f"Starting LOR API on {uvicorn_config['host']}:{uvicorn_config['port']}")
    uvicorn.run(**uvicorn_config)


def register_command(cli_group):
    """Register the serve command."""
    cli_group.add_command(serve_command)
