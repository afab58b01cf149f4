"""
HVQ constants and lookup tables.

Every consumer of impact weights (the status writer and the scorer) reads
IMPACT_WEIGHTS from here.

Formula constants:
    HUMAN_FLOOR_BASE          50     starting human floor
    HUMAN_MOAT_MULTIPLIER     2      course pillar == role's primary pillar
    AI_LEVERAGE_PAID          1.5    any paid-tier tool adopted
    AI_LEVERAGE_FREE          1.1    any free-tier tool adopted
    DELEGATION_BONUS_PER_TASK 0.05   per completed delegation, vulnerability <= 0.7
    ..._HIGH_RISK             0.08   per completed delegation, vulnerability > 0.7
    MIN_DENOMINATOR           0.01
    EXECUTION_BONUS_PER_STEP  15     flat points per completed immediate step
    HVQ_DECAY_RATE            0.05   per month since last update
    HVQ_MIN / HVQ_CAP         10 / 1000
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from humanvq.models.enumerations import PillarName, ResourceStatus

# Knowledge decay: the world gets this much "smarter" each month.
HVQ_DECAY_RATE = Decimal("0.05")
# 365.25 / 12 days
SECONDS_PER_MONTH = Decimal("2629800")

HUMAN_FLOOR_BASE = Decimal("50")
HUMAN_MOAT_MULTIPLIER = Decimal("2")
HVQ_MIN = 10
HVQ_CAP = 1000

DELEGATION_BONUS_PER_TASK = Decimal("0.05")
DELEGATION_BONUS_PER_TASK_HIGH_RISK = Decimal("0.08")
VULNERABILITY_HIGH_RISK_THRESHOLD = Decimal("0.7")
VULNERABILITY_MODERATE_RISK_THRESHOLD = Decimal("0.4")
MIN_DENOMINATOR = Decimal("0.01")

AI_LEVERAGE_PAID = Decimal("1.5")
AI_LEVERAGE_FREE = Decimal("1.1")

EXECUTION_BONUS_PER_STEP = Decimal("15")

NEUTRAL_VULNERABILITY = Decimal("0.5")

# Pillar Power: one very strong pillar cuts vulnerability by a further 20%.
PILLAR_POWER_THRESHOLD = Decimal("0.8")
PILLAR_POWER_REDUCTION = Decimal("0.2")

IMPACT_WEIGHTS: Mapping[str, Decimal] = MappingProxyType({
    ResourceStatus.SUGGESTED.value:       Decimal("0.5"),
    ResourceStatus.WISHLISTED.value:      Decimal("0.2"),
    ResourceStatus.ADDED_FREE.value:      Decimal("1.0"),
    ResourceStatus.ADDED_ENROLLED.value:  Decimal("1.0"),
    ResourceStatus.ADDED_PAID.value:      Decimal("1.5"),
    ResourceStatus.ADDED_COMPLETED.value: Decimal("1.5"),
    ResourceStatus.REMOVED.value:         Decimal("0"),
})

# Tool statuses that grant AI leverage, by tier
PAID_TIER_STATUSES = frozenset({ResourceStatus.ADDED_PAID.value})
FREE_TIER_STATUSES = frozenset({ResourceStatus.ADDED_FREE.value})
# Course statuses that build the human floor; suggested and wishlisted
# courses are not adopted
ADOPTED_COURSE_STATUSES = frozenset({ResourceStatus.ADDED_COMPLETED.value})

# Roles offered at intake → the pillar that defines their human moat
GOAL_PILLAR_MAP: Mapping[str, str] = MappingProxyType({
    "Manager":   PillarName.CONNECTION.value,
    "Developer": PillarName.EDGE_CASE.value,
    "Nurse":     PillarName.LIABILITY.value,
    "Founder":   PillarName.CONTEXT.value,
    "Sales":     PillarName.CONNECTION.value,
    "Designer":  PillarName.CONTEXT.value,
    "Teacher":   PillarName.CONNECTION.value,
    "Engineer":  PillarName.EDGE_CASE.value,
})

PRIMARY_PILLAR_WEIGHT = Decimal("0.40")
SECONDARY_PILLAR_WEIGHT = Decimal("0.20")
EQUAL_PILLAR_WEIGHT = Decimal("0.25")

PILLAR_ORDER = tuple(p.value for p in PillarName)

UNIFORM_PILLAR_WEIGHTS: Mapping[str, Decimal] = MappingProxyType(
    {p: EQUAL_PILLAR_WEIGHT for p in PILLAR_ORDER}
)


def _role_weights(primary: str) -> Mapping[str, Decimal]:
    return MappingProxyType({
        p: PRIMARY_PILLAR_WEIGHT if p == primary else SECONDARY_PILLAR_WEIGHT
        for p in PILLAR_ORDER
    })


# Keyed by lower-cased role; weights sum to 1.0
ROLE_PILLAR_WEIGHTS: Mapping[str, Mapping[str, Decimal]] = MappingProxyType({
    role.lower(): _role_weights(pillar) for role, pillar in GOAL_PILLAR_MAP.items()
})
