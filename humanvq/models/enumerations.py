from enum import Enum


class PillarName(str, Enum):
    LIABILITY = "liability"      # Accountability a machine cannot carry
    CONTEXT = "context"          # Situational and organisational judgement
    EDGE_CASE = "edgeCase"       # Handling the unusual and unstructured
    CONNECTION = "connection"    # Trust and human relationships


class ResourceType(str, Enum):
    AI_TOOL = "ai_tool"
    HUMAN_COURSE = "human_course"


class ResourceStatus(str, Enum):
    SUGGESTED = "suggested"
    ADDED_FREE = "added_free"            # Tool in use on a free tier
    ADDED_PAID = "added_paid"            # Tool in use on a paid tier
    ADDED_ENROLLED = "added_enrolled"    # Course started
    ADDED_COMPLETED = "added_completed"  # Course finished
    WISHLISTED = "wishlisted"
    REMOVED = "removed"


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class ScoreBand(str, Enum):
    AT_RISK = "at_risk"
    BUILDING = "building"
    SOLID = "solid"
    STRONG = "strong"
