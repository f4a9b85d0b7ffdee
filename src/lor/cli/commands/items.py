"""Item CLI commands."""

import json
import sys

import click
from loguru import logger

from ...catalog import ItemCatalog
from ...exceptions import LORError
from ...models import Item
from ...services.fs import UploadedFiles
from . import get_lifecycle


def register_commands(group: click.Group):
    """Register items commands."""
    group.add_command(create_item)
    group.add_command(update_item)
    group.add_command(delete_item)
    group.add_command(show_item)
    group.add_command(list_items)


def _catalog(ctx: click.Context) -> ItemCatalog:
    return ItemCatalog(get_lifecycle(ctx))


def _payload(link: str | None, video: str | None, extra: tuple[str, ...]) -> dict:
    data: dict = {}
    if link:
        data["link"] = link
    if video:
        data["video"] = video
    for pair in extra:
        key, sep, value = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"Expected KEY=VALUE, got {pair!r}", param_hint="--set")
        data[key] = value
    return data


def _report(result, action: str, item_id: int) -> None:
    if result:
        click.echo(f"{action} item {item_id}")
        return
    for prop, reason in result.failures.items():
        logger.error(f"{prop}: {reason}")
    click.echo(f"Failed to {action.lower()} item {item_id}", err=True)
    sys.exit(1)


file_options = [
    click.option("--pdf", type=click.Path(exists=True, dir_okay=False), help="PDF file"),
    click.option("--document", type=click.Path(exists=True, dir_okay=False), help=".docx file"),
    click.option("--image", type=click.Path(exists=True, dir_okay=False), help="Thumbnail image"),
    click.option("--link", help="Web page URL (link type)"),
    click.option("--video", help="Video URL (video type)"),
    click.option("--set", "extra", multiple=True, help="Extra KEY=VALUE passed to the type"),
]


def with_file_options(fn):
    for option in reversed(file_options):
        fn = option(fn)
    return fn


@click.command(name="create")
@click.argument("name")
@click.option("--type", "type_name", default="file", show_default=True, help="Resource type")
@click.option("--category", help="Category")
@click.option("--grade", "grades", multiple=True, help="Grade (repeatable)")
@click.option("--topic", "topics", multiple=True, help="Topic (repeatable)")
@click.option("--description", default="", help="Description")
@click.option("--owner", help="Owner user id")
@with_file_options
@click.pass_context
def create_item(ctx, name, type_name, category, grades, topics, description, owner,
                pdf, document, image, link, video, extra):
    """
    Create an item.

    Examples:

        \b
        lor items create "Photosynthesis" --pdf lesson.pdf --document lesson.docx
        lor items create "Khan: Cells" --type video --video https://youtu.be/URUJD5NEXC8
    """
    try:
        item, result = _catalog(ctx).create(
            Item(
                name=name,
                type=type_name,
                owner=owner,
                category=category,
                grades=list(grades),
                topics=list(topics),
                description=description,
            ),
            _payload(link, video, extra),
            UploadedFiles.from_paths(pdf=pdf, document=document, image=image),
        )
    except LORError as e:
        logger.error(str(e))
        sys.exit(1)

    _report(result, "Created", item.id)


@click.command(name="update")
@click.argument("item_id", type=int)
@click.option("--name", help="New name (stored files are renamed)")
@click.option("--category", help="Category ('' clears it)")
@click.option("--grade", "grades", multiple=True, help="Replace grades")
@click.option("--topic", "topics", multiple=True, help="Replace topics")
@click.option("--description", help="Description")
@with_file_options
@click.pass_context
def update_item(ctx, item_id, name, category, grades, topics, description,
                pdf, document, image, link, video, extra):
    """Edit an item. Only given options change."""
    data = _payload(link, video, extra)
    for key, value in (("name", name), ("category", category), ("description", description)):
        if value is not None:
            data[key] = value
    if grades:
        data["grades"] = list(grades)
    if topics:
        data["topics"] = list(topics)

    try:
        item, result = _catalog(ctx).update(
            item_id, data, UploadedFiles.from_paths(pdf=pdf, document=document, image=image)
        )
    except LORError as e:
        logger.error(str(e))
        sys.exit(1)

    _report(result, "Updated", item.id)


@click.command(name="delete")
@click.argument("item_id", type=int)
@click.pass_context
def delete_item(ctx, item_id):
    """Delete an item with its stored files."""
    try:
        result = _catalog(ctx).delete(item_id)
    except LORError as e:
        logger.error(str(e))
        sys.exit(1)

    _report(result, "Deleted", item_id)


@click.command(name="show")
@click.argument("item_id", type=int)
@click.pass_context
def show_item(ctx, item_id):
    """Print an item, its stored attributes and resource URL as JSON."""
    lifecycle = get_lifecycle(ctx)
    try:
        item = ItemCatalog(lifecycle).get(item_id)
        resource_type = lifecycle.resource_type(item.type)
    except LORError as e:
        logger.error(str(e))
        sys.exit(1)

    output = {
        "item": item.model_dump(mode="json"),
        "attributes": lifecycle.services.data.get_item_data(item_id),
        "complete": resource_type.is_complete(item_id),
        "resource_url": resource_type.resolve_resource_url(item_id),
        "unique_identifier": resource_type.unique_identifier(item_id),
    }
    click.echo(json.dumps(output, indent=2))


@click.command(name="list")
@click.option("--keywords", "-k", help="Substring search terms")
@click.option("--type", "types", multiple=True, help="Resource type filter")
@click.option("--category", "categories", multiple=True, help="Category filter")
@click.option("--grade", "grades", multiple=True, help="Grade filter")
@click.pass_context
def list_items(ctx, keywords, types, categories, grades):
    """List items matching filters."""
    items = get_lifecycle(ctx).services.items.search(keywords, types, categories, grades)
    for item in items:
        click.echo(f"{item.id}\t{item.type}\t{item.name}")
