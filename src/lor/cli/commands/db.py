"""Database CLI commands."""

import click
from loguru import logger

from ...types import TypeServices


def register_commands(group: click.Group):
    """Register db commands."""
    group.add_command(init)


@click.command()
@click.option("--drop", is_flag=True, help="Drop existing tables first")
def init(drop: bool):
    """
    Create the item, attribute and vocabulary tables.

    Uses DATABASE__URL from the environment or .env file.
    """
    services = TypeServices.from_settings()
    if drop:
        click.confirm("Drop all LOR tables?", abort=True)
        services.db.drop_schema()
    services.db.create_schema()
    services.storage.get_path_to_repository()
    logger.info(f"Repository root: {services.storage.root}")
