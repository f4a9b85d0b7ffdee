"""Category and grade vocabulary commands."""

import click

from . import get_lifecycle


def register_commands(group: click.Group, kind: str):
    """Register add/list commands managing one vocabulary."""

    @group.command(name="add")
    @click.argument("names", nargs=-1, required=True)
    @click.pass_context
    def add(ctx: click.Context, names: tuple[str, ...]):
        """Add one or more entries."""
        store = get_lifecycle(ctx).services.items
        adder = store.add_category if kind == "category" else store.add_grade
        for name in names:
            if adder(name):
                click.echo(f"Added {kind}: {name}")
            else:
                click.echo(f"{kind.capitalize()} already exists: {name}")

    @group.command(name="list")
    @click.pass_context
    def list_entries(ctx: click.Context):
        """List all entries."""
        store = get_lifecycle(ctx).services.items
        entries = store.list_categories() if kind == "category" else store.list_grades()
        for name in entries:
            click.echo(name)
