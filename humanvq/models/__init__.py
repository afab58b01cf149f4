from humanvq.models.enumerations import (
    PillarName,
    ResourceStatus,
    ResourceType,
    RiskLevel,
    ScoreBand,
)
from humanvq.models.path import (
    DEFAULT_PILLARS,
    DelegateTask,
    EfficiencyAudit,
    HumanPillars,
    ImmediateStep,
    KeepForHumanTask,
    PathRecord,
    PathSnapshot,
    RoleProfile,
)
from humanvq.models.resource import ResourceLists, ResourceRef

__all__ = [
    "DEFAULT_PILLARS",
    "DelegateTask",
    "EfficiencyAudit",
    "HumanPillars",
    "ImmediateStep",
    "KeepForHumanTask",
    "PathRecord",
    "PathSnapshot",
    "PillarName",
    "ResourceLists",
    "ResourceRef",
    "ResourceStatus",
    "ResourceType",
    "RiskLevel",
    "ScoreBand",
    "RoleProfile",
]
