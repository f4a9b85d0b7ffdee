"""
CoreModel - Base model for LOR records.

Provides:
- Identity (id - integer assigned by the database on insert)
- Temporal tracking (created_at, updated_at)
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CoreModel(BaseModel):
    """
    Base model for LOR records.

    Note: IDs are assigned by the database; a model that has not been
    persisted yet has ``id=None``.
    """

    id: int | None = Field(
        default=None,
        description="Database identifier (assigned on insert)",
    )
    created_at: datetime = Field(
        default_factory=utcnow, description="Record creation timestamp"
    )
    updated_at: datetime = Field(
        default_factory=utcnow, description="Last update timestamp"
    )
