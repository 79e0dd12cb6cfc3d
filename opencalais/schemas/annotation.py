"""Serializable annotation summaries."""

from typing import Any

from pydantic import BaseModel, Field


class DocumentAnnotations(BaseModel):
    """Topics, social tags and entities extracted for one document."""

    topics: dict[str, dict[str, Any]] = Field(default_factory=dict)
    social_tags: dict[str, dict[str, Any]] = Field(default_factory=dict)
    entities: dict[str, dict[str, dict[str, Any]]] = Field(default_factory=dict)
    topic_count: int = 0
    social_tag_count: int = 0
    entity_count: int = 0
