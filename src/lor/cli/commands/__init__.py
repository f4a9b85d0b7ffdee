"""Shared helpers for CLI commands."""

import click

from ...lifecycle import ItemLifecycle
from ...types import TypeServices


def get_lifecycle(ctx: click.Context) -> ItemLifecycle:
    """
    Lifecycle coordinator for the current invocation.

    Tests inject one through ``obj={"lifecycle": ...}``; otherwise it is
    built from settings with the schema created.
    """
    obj = ctx.ensure_object(dict)
    if "lifecycle" not in obj:
        services = TypeServices.from_settings()
        services.db.create_schema()
        obj["lifecycle"] = ItemLifecycle(services)
    return obj["lifecycle"]
