# humanvq/scoring/hvq_calculator.py
"""
HVQ Calculator
---------------
Computes the Human Value Quotient for one upgrade path.

Formula:
    HumanFloor  = 50 + Σ (hvq_score_human × weight × moat)
                  over adopted (added_completed) human courses;
                  moat = 2 when the course's pillar is the role's primary pillar
    AILeverage  = 1.5 if any tool is added_paid, × 1.1 if any tool is added_free
    Delegation  = completed delegate tasks × (0.08 if V > 0.7 else 0.05),
                  capped at V − 0.01
    Denominator = max(0.01, V − Delegation)
    Raw         = HumanFloor × AILeverage / Denominator
    Score       = (Raw + 15 × completed immediate steps) × (1 − 0.05)^months
    HVQ         = round(Score) bounded to [10, 1000]

`months` is measured from `last_updated_at` to the caller-supplied `as_of`.
With either timestamp missing no decay is applied; the calculator never reads
the system clock.
"""
import structlog
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Mapping, Optional

from humanvq.models.path import PathSnapshot
from humanvq.models.resource import ResourceLists
from humanvq.scoring.constants import (
    AI_LEVERAGE_FREE,
    ADOPTED_COURSE_STATUSES,
    AI_LEVERAGE_PAID,
    DELEGATION_BONUS_PER_TASK,
    DELEGATION_BONUS_PER_TASK_HIGH_RISK,
    EXECUTION_BONUS_PER_STEP,
    FREE_TIER_STATUSES,
    HUMAN_FLOOR_BASE,
    HUMAN_MOAT_MULTIPLIER,
    HVQ_CAP,
    HVQ_DECAY_RATE,
    HVQ_MIN,
    MIN_DENOMINATOR,
    NEUTRAL_VULNERABILITY,
    PAID_TIER_STATUSES,
    SECONDS_PER_MONTH,
    VULNERABILITY_HIGH_RISK_THRESHOLD,
)
from humanvq.scoring.resource_status import impact_weight, status_of
from humanvq.scoring.utils import clamp, round_half_up, safe_decimal, to_utc_datetime

logger = structlog.get_logger(__name__)


@dataclass
class HVQResult:
    """Output of HVQCalculator.calculate()."""
    hvq_score: int                 # Final HVQ in [10, 1000]
    human_floor: Decimal
    ai_leverage: Decimal
    vulnerability: Decimal         # Input vulnerability after clamping
    delegation_bonus: Decimal
    denominator: Decimal           # Effective vulnerability, >= 0.01
    raw_score: Decimal             # HumanFloor × AILeverage / Denominator
    execution_bonus: Decimal
    months_since_update: Decimal
    decay_factor: Decimal          # (1 − HVQ_DECAY_RATE)^months, 1 when no decay
    decayed_score: Decimal         # (raw + execution) × decay, before rounding


class HVQCalculator:
    """Calculate the HVQ score and its breakdown."""

    def human_floor(
        self,
        resource_lists: ResourceLists,
        resource_weights: Mapping[str, float],
        resource_status: Mapping[str, str],
        primary_pillar: Optional[str],
    ) -> Decimal:
        floor = HUMAN_FLOOR_BASE
        for course in resource_lists.human_courses:
            status = status_of(course.id, resource_status)
            if status not in ADOPTED_COURSE_STATUSES:
                continue
            status_weight = impact_weight(status)
            # a persisted impact_weight takes precedence over the status table
            weight = safe_decimal(resource_weights.get(course.id), status_weight)
            moat = (
                HUMAN_MOAT_MULTIPLIER
                if primary_pillar and course.hvq_primary_pillar == primary_pillar
                else Decimal("1")
            )
            score_human = max(Decimal("0"), safe_decimal(course.hvq_score_human))
            floor += score_human * weight * moat
        return floor

    def ai_leverage(
        self,
        resource_lists: ResourceLists,
        resource_status: Mapping[str, str],
    ) -> Decimal:
        statuses = {status_of(t.id, resource_status) for t in resource_lists.ai_tools}
        leverage = Decimal("1")
        if statuses & PAID_TIER_STATUSES:
            leverage *= AI_LEVERAGE_PAID
        if statuses & FREE_TIER_STATUSES:
            leverage *= AI_LEVERAGE_FREE
        return leverage

    def delegation_bonus(self, completed_tasks: int, vulnerability: Decimal) -> Decimal:
        per_task = (
            DELEGATION_BONUS_PER_TASK_HIGH_RISK
            if vulnerability > VULNERABILITY_HIGH_RISK_THRESHOLD
            else DELEGATION_BONUS_PER_TASK
        )
        return min(
            completed_tasks * per_task,
            max(Decimal("0"), vulnerability - MIN_DENOMINATOR),
        )

    def months_since(
        self,
        last_updated_at: Optional[datetime],
        as_of: Optional[datetime],
    ) -> Decimal:
        then = to_utc_datetime(last_updated_at)
        now = to_utc_datetime(as_of)
        if then is None or now is None:
            return Decimal("0")
        seconds = Decimal(str((now - then).total_seconds()))
        return max(Decimal("0"), seconds / SECONDS_PER_MONTH)

    def calculate(
        self,
        path_data: Optional[PathSnapshot],
        resource_lists: Optional[ResourceLists],
        resource_weights: Optional[Mapping[str, float]],
        vulnerability: float,
        resource_status: Optional[Mapping[str, str]],
        primary_pillar: Optional[str] = None,
        last_updated_at: Optional[datetime] = None,
        *,
        as_of: Optional[datetime] = None,
    ) -> HVQResult:
        """
        Args:
            path_data: Efficiency audit, immediate steps and updated_at.
            resource_lists: AI tools and human courses attached to the path.
            resource_weights: Persisted impact_weight per resource id. Optional;
                              when absent the weight comes from the status.
            vulnerability: Baseline replacement risk in [0, 1].
            resource_status: Resource id → status string.
            primary_pillar: The role's primary pillar; matching courses count 2×.
            last_updated_at: When the path last changed.
            as_of: The instant to score at. Required for decay.

        Returns:
            HVQResult with hvq_score and full breakdown.

        Examples:
            >>> HVQCalculator().calculate(None, None, None, 0.5, None).hvq_score
            100
        """
        path_data = path_data or PathSnapshot()
        resource_lists = resource_lists or ResourceLists()
        resource_weights = resource_weights or {}
        resource_status = resource_status or {}

        v = clamp(safe_decimal(vulnerability, NEUTRAL_VULNERABILITY))

        floor = self.human_floor(resource_lists, resource_weights, resource_status, primary_pillar)
        leverage = self.ai_leverage(resource_lists, resource_status)

        completed_tasks = path_data.efficiency_audit.completed_delegations
        bonus = self.delegation_bonus(completed_tasks, v)
        denominator = max(MIN_DENOMINATOR, v - bonus)

        raw = floor * leverage / denominator
        execution = EXECUTION_BONUS_PER_STEP * path_data.completed_steps

        months = self.months_since(last_updated_at, as_of)
        decay = (Decimal("1") - HVQ_DECAY_RATE) ** months if months > 0 else Decimal("1")
        decayed = (raw + execution) * decay

        score = min(HVQ_CAP, max(HVQ_MIN, round_half_up(decayed)))

        logger.info(
            "hvq_calculated",
            vulnerability=float(v),
            primary_pillar=primary_pillar,
            human_floor=float(floor),
            ai_leverage=float(leverage),
            completed_delegations=completed_tasks,
            delegation_bonus=float(bonus),
            denominator=float(denominator),
            raw_score=float(raw),
            execution_bonus=float(execution),
            months_since_update=float(months),
            decay_factor=float(decay),
            hvq_score=score,
        )

        return HVQResult(
            hvq_score=score,
            human_floor=floor,
            ai_leverage=leverage,
            vulnerability=v,
            delegation_bonus=bonus,
            denominator=denominator,
            raw_score=raw,
            execution_bonus=execution,
            months_since_update=months,
            decay_factor=decay,
            decayed_score=decayed,
        )


_calculator = HVQCalculator()


def calculate_hvq_score(
    path_data: Optional[PathSnapshot],
    resource_lists: Optional[ResourceLists],
    resource_weights: Optional[Mapping[str, float]],
    vulnerability: float,
    resource_status: Optional[Mapping[str, str]],
    primary_pillar: Optional[str] = None,
    last_updated_at: Optional[datetime] = None,
    *,
    as_of: Optional[datetime] = None,
) -> int:
    """Integer HVQ score; see HVQCalculator.calculate for arguments."""
    return _calculator.calculate(
        path_data,
        resource_lists,
        resource_weights,
        vulnerability,
        resource_status,
        primary_pillar,
        last_updated_at,
        as_of=as_of,
    ).hvq_score
