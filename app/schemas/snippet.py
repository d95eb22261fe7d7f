"""Schemas for snippets."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SnippetIn(BaseModel):
    """Body for creating or editing a snippet."""

    content: str = Field(..., min_length=1, description="Snippet text")


class SnippetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: int
    content: str
    created_at: datetime
    updated_at: datetime
