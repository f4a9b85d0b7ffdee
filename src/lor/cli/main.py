"""
LOR CLI entry point.

Usage:
    lor db init
    lor items create "Photosynthesis" --type file --pdf lesson.pdf --document lesson.docx
    lor items update 42 --name "Photosynthesis v2"
    lor items delete 42
    lor categories add Science
    lor serve
"""

import sys

import click
from loguru import logger


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """LOR - Learning Object Repository CLI."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")
    ctx.ensure_object(dict)


@cli.group()
def db():
    """Database operations."""
    pass


@cli.group()
def items():
    """Create, edit and delete items."""
    pass


@cli.group()
def categories():
    """Manage the category vocabulary."""
    pass


@cli.group()
def grades():
    """Manage the grade vocabulary."""
    pass


# Register commands
from .commands.db import register_commands as register_db_commands
from .commands.items import register_commands as register_items_commands
from .commands.serve import register_command as register_serve_command
from .commands.vocabulary import register_commands as register_vocabulary_commands

register_db_commands(db)
register_items_commands(items)
register_vocabulary_commands(categories, kind="category")
register_vocabulary_commands(grades, kind="grade")
register_serve_command(cli)


def main():
    cli()


if __name__ == "__main__":
    main()
