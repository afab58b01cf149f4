# humanvq/models/path.py
"""
Path models — typed shapes of an upgrade path as the scorer sees it.

Persisted rows arrive through humanvq.services.snapshot_parser, which turns
JSON-encoded columns into these models before any score is computed.
"""

from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _none_to_list(v: Any) -> Any:
    return [] if v is None else v


class HumanPillars(BaseModel):
    """Four human-pillar scores in [0, 1]; higher means harder to automate."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    liability: float = Field(default=0.5, ge=0, le=1)
    context: float = Field(default=0.5, ge=0, le=1)
    edge_case: float = Field(default=0.5, ge=0, le=1, alias="edgeCase")
    connection: float = Field(default=0.5, ge=0, le=1)

    def as_dict(self) -> dict[str, float]:
        """Pillar values keyed by PillarName value."""
        return {
            "liability": self.liability,
            "context": self.context,
            "edgeCase": self.edge_case,
            "connection": self.connection,
        }


# Used when AI analysis has not produced pillar scores yet.
DEFAULT_PILLARS = HumanPillars()


class RoleProfile(BaseModel):
    role: str = ""
    pillars: HumanPillars = Field(default_factory=HumanPillars)


class DelegateTask(BaseModel):
    """Work nominated for automation."""
    model_config = ConfigDict(extra="ignore")

    task: str = ""
    is_completed: bool = False
    hours_per_week: Optional[float] = Field(default=None, ge=0)


class KeepForHumanTask(BaseModel):
    """Work nominated to stay human; fortified once a course verifies it."""
    model_config = ConfigDict(extra="ignore")

    task: str = ""
    is_completed: bool = False
    is_fortified: bool = False


class EfficiencyAudit(BaseModel):
    model_config = ConfigDict(extra="ignore")

    delegate_to_machine: List[DelegateTask] = Field(default_factory=list)
    keep_for_human: List[KeepForHumanTask] = Field(default_factory=list)

    @field_validator("delegate_to_machine", "keep_for_human", mode="before")
    @classmethod
    def lists_not_null(cls, v: Any) -> Any:
        return _none_to_list(v)

    @property
    def completed_delegations(self) -> int:
        return sum(1 for t in self.delegate_to_machine if t.is_completed)

    @property
    def fortified_count(self) -> int:
        return sum(1 for t in self.keep_for_human if t.is_fortified)


class ImmediateStep(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str = ""
    is_completed: bool = False


class PathSnapshot(BaseModel):
    """The part of a path the scorer reads, read fresh before every score."""
    model_config = ConfigDict(extra="ignore")

    efficiency_audit: EfficiencyAudit = Field(default_factory=EfficiencyAudit)
    immediate_steps: List[ImmediateStep] = Field(default_factory=list)
    updated_at: Optional[datetime] = None

    @field_validator("efficiency_audit", mode="before")
    @classmethod
    def audit_not_null(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("immediate_steps", mode="before")
    @classmethod
    def steps_not_null(cls, v: Any) -> Any:
        return _none_to_list(v)

    @property
    def completed_steps(self) -> int:
        return sum(1 for s in self.immediate_steps if s.is_completed)


class PathRecord(BaseModel):
    """A persisted upgrade_paths row, before boundary parsing."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    role: Optional[str] = None
    efficiency_audit: Union[str, dict, None] = None
    immediate_steps: Union[str, list, None] = None
    primary_pillar: Optional[str] = None
    pillar_liability: Optional[float] = None
    pillar_context: Optional[float] = None
    pillar_edge_case: Optional[float] = None
    pillar_connection: Optional[float] = None
    updated_at: Union[datetime, str, int, float, None] = None
    current_hvq_score: Optional[int] = None
    previous_hvq_score: Optional[int] = None
