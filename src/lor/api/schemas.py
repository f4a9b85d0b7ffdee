"""Response models for the LOR API."""

from pydantic import BaseModel, Field


class ResourceSummary(BaseModel):
    """Search result entry."""

    id: int
    name: str
    type: str
    category: str | None = None
    grades: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    description: str = ""
    owner: str | None = None
    image_url: str
    resource_url: str | None = None


class ResourceDetail(ResourceSummary):
    """A single resource as shown on its view page."""

    title: str
    heading: str
    display_html: str
    display_height: str
    embed_html: str
    unique_identifier: str | None = None


class ResourceTypeInfo(BaseModel):
    name: str
    label: str
    properties: list[str]
    display_height: str


class UserInfo(BaseModel):
    user_id: str | None
    authenticated: bool
    context: str


class OperationResponse(BaseModel):
    id: int
    success: bool
    failures: dict[str, str] = Field(default_factory=dict)
