"""
Video resource type.

Stores the watch URL of a hosted video. YouTube and Vimeo URLs are turned
into their embeddable player URLs for display; other URLs are embedded as is.
"""

import html
import re
from typing import Any

from ..services.fs import UploadHandle
from .base import (
    OperationResult,
    ResourceType,
    delete_attributes,
    get_item,
    render_embed_table,
    replace_submitted_values,
    store_submitted_values,
)
from .form import ItemForm

_YOUTUBE = re.compile(
    r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|shorts/)|youtu\.be/)([A-Za-z0-9_-]{11})"
)
_VIMEO = re.compile(r"vimeo\.com/(?:video/)?(\d+)")


def youtube_id(url: str) -> str | None:
    match = _YOUTUBE.search(url)
    return match.group(1) if match else None


def player_url(url: str) -> str:
    """Embeddable player URL for a watch URL."""
    if video_id := youtube_id(url):
        return f"https://www.youtube.com/embed/{video_id}"
    if match := _VIMEO.search(url):
        return f"https://player.vimeo.com/video/{match.group(1)}"
    return url


class VideoType(ResourceType):
    """Hosted video."""

    name = "video"
    label = "Video"
    properties = ("video",)
    primary_property = "video"
    height = "480px"

    def augment_creation_form(self, form: ItemForm, existing_item_id: int | None = None) -> None:
        form.add_element("url", "video", label="Video", help="YouTube, Vimeo or direct video URL")
        form.add_rule("video", "url")
        if not existing_item_id:
            form.add_rule("video", "required")

    def create(
        self, item_id: int, data: dict[str, Any], upload: UploadHandle | None = None
    ) -> OperationResult:
        return store_submitted_values(self.data, item_id, data, self.declared_properties())

    def update(
        self, item_id: int, data: dict[str, Any], upload: UploadHandle | None = None
    ) -> OperationResult:
        return replace_submitted_values(self.data, item_id, data, self.declared_properties())

    def delete(self, item_id: int) -> OperationResult:
        return delete_attributes(self.data, item_id, OperationResult())

    def embed_view(self, item_id: int) -> str:
        item = get_item(self.services, item_id)
        url = self.embed_filepath(item_id)
        video_id = youtube_id(url or "")
        if video_id and not item.image:
            image_url = f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg"
        else:
            image_url = self.storage.get_image_url(item)
        return render_embed_table(item.name, url, image_url, item.topics)

    def display_view(self, item_id: int) -> str:
        src = html.escape(player_url(self.embed_filepath(item_id) or ""), quote=True)
        return (
            f'<iframe src="{src}" width="100%" height="100%" frameborder="0" '
            'allow="autoplay; encrypted-media; picture-in-picture" allowfullscreen></iframe>'
        )

    def resolve_resource_url(self, item_id: int) -> str | None:
        return self.embed_filepath(item_id)

    def unique_identifier(self, item_id: int) -> str | None:
        url = self.embed_filepath(item_id)
        if url is None:
            return None
        video_id = youtube_id(url)
        return f"youtube:{video_id}" if video_id else url
