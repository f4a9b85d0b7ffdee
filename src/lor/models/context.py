"""
RequestContext - per-request rendering and access state.

Built once per request and passed explicitly to whatever renders a page or
needs to know who is asking.
"""

from pydantic import BaseModel, Field


class RequestContext(BaseModel):
    """Target URL, page title/heading and access-control context of a request."""

    url: str = Field(..., description="URL of the page being served")
    title: str = Field(default="Learning Object Repository", description="Page title")
    heading: str = Field(default="Learning Object Repository", description="Page heading")
    user_id: str | None = Field(default=None, description="Authenticated user, if any")
    context: str = Field(
        default="system",
        description="Access-control context the request is evaluated in",
    )

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def with_page(self, title: str, heading: str | None = None) -> "RequestContext":
        """Return a copy targeting a specific page."""
        return self.model_copy(update={"title": title, "heading": heading or title})
