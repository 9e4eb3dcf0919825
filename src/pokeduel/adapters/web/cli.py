"""CLI for running the Web adapter server.

This module provides a command-line interface for starting the FastAPI-based
Web adapter server with configurable options.
"""

from pathlib import Path

import click
import uvicorn

from pokeduel.adapters.web.server import create_web_adapter
from pokeduel.config import ConfigError, load_config
from pokeduel.utils.telemetry import get_logger, setup_logging


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.option("--log-level", default=None, help="Log level")
def run_server(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    log_level: str | None,
) -> None:
    """Run the Web adapter server."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    # CLI options win over file and environment
    if host is not None:
        config.web.host = host
    if port is not None:
        config.web.port = port
    if log_level is not None:
        config.logging.level = log_level.upper()

    setup_logging(config.logging.level, config.logging.format)
    logger = get_logger("pokeduel.web_cli")

    logger.info(
        "Starting web server",
        host=config.web.host,
        port=config.web.port,
        base_url=config.pokeapi.base_url,
        max_creature_id=config.pokeapi.max_creature_id,
    )

    web_adapter = create_web_adapter(config)

    uvicorn.run(
        web_adapter.app,
        host=config.web.host,
        port=config.web.port,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    run_server()
