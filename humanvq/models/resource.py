# humanvq/models/resource.py
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResourceRef(BaseModel):
    """An AI tool or human course from the resource catalog."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    hvq_score_machine: Optional[float] = None
    hvq_score_human: Optional[float] = None
    hvq_primary_pillar: Optional[str] = None


class ResourceLists(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ai_tools: List[ResourceRef] = Field(default_factory=list)
    human_courses: List[ResourceRef] = Field(default_factory=list)

    @field_validator("ai_tools", "human_courses", mode="before")
    @classmethod
    def lists_not_null(cls, v: Any) -> Any:
        return [] if v is None else v
