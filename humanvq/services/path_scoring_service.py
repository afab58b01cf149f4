"""
services/path_scoring_service.py

Scores one persisted upgrade path end to end.

Pipeline steps:
  1. Parse the row into a PathSnapshot (fail-soft)
  2. Parse pillar columns (neutral 0.5 when missing)
  3. VulnerabilityEstimator → vulnerability
  4. Resolve the primary pillar (explicit column, else GOAL_PILLAR_MAP)
  5. HVQCalculator → HVQ score and breakdown
  6. Compare with the persisted score for the knowledge-decay warning
  7. Build the score rollover the caller writes back

Nothing here touches storage; the caller fetches the row and resources
fresh, and persists the returned rollover.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional

import structlog

from humanvq.config import Settings, get_settings
from humanvq.models.enumerations import RiskLevel
from humanvq.models.resource import ResourceLists
from humanvq.scoring.hvq_calculator import HVQCalculator, HVQResult
from humanvq.scoring.score_trend import (
    ScoreRollover,
    classify_risk,
    roll_scores,
    should_show_decay_warning,
)
from humanvq.scoring.vulnerability import VulnerabilityEstimator, resolve_primary_pillar
from humanvq.services.snapshot_parser import (
    RawRecord,
    as_path_record,
    parse_path_snapshot,
    parse_pillars,
)

logger = structlog.get_logger(__name__)


@dataclass
class PathScore:
    """Result of PathScoringService.score_path()."""
    path_id: Optional[str]
    hvq_score: int
    vulnerability: float
    primary_pillar: Optional[str]
    risk_level: RiskLevel
    show_decay_warning: bool
    rollover: ScoreRollover
    breakdown: HVQResult


class PathScoringService:
    """Parse → vulnerability → HVQ → trend for a single path."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.vulnerability_estimator = VulnerabilityEstimator()
        self.hvq_calculator = HVQCalculator()

    def score_path(
        self,
        record: RawRecord,
        resource_lists: Optional[ResourceLists],
        resource_status: Optional[Mapping[str, str]],
        resource_weights: Optional[Mapping[str, float]] = None,
        *,
        as_of: Optional[datetime] = None,
    ) -> PathScore:
        """
        Args:
            record: upgrade_paths row (PathRecord or dict).
            resource_lists: Tools and courses joined to the path.
            resource_status: Resource id → status from path_resources.
            resource_weights: Resource id → persisted impact_weight, optional.
            as_of: Instant to score at; needed for knowledge decay.

        Returns:
            PathScore with the new score, decay warning and rollover.
        """
        rec = as_path_record(record)
        snapshot = parse_path_snapshot(rec)
        pillars = parse_pillars(rec)

        vuln_result = self.vulnerability_estimator.calculate(rec.role, pillars)
        primary_pillar = resolve_primary_pillar(rec.role, rec.primary_pillar)

        decay_as_of = as_of if self.settings.HVQ_DECAY_ENABLED else None
        result = self.hvq_calculator.calculate(
            snapshot,
            resource_lists,
            resource_weights,
            float(vuln_result.vulnerability),
            resource_status,
            primary_pillar,
            snapshot.updated_at,
            as_of=decay_as_of,
        )

        show_warning = should_show_decay_warning(result.hvq_score, rec.current_hvq_score)
        rollover = roll_scores(rec.current_hvq_score, result.hvq_score)

        logger.info(
            "path_scored",
            path_id=rec.id,
            role=rec.role,
            primary_pillar=primary_pillar,
            vulnerability=float(vuln_result.vulnerability),
            hvq_score=result.hvq_score,
            previous_hvq_score=rec.current_hvq_score,
            show_decay_warning=show_warning,
        )

        return PathScore(
            path_id=rec.id,
            hvq_score=result.hvq_score,
            vulnerability=float(vuln_result.vulnerability),
            primary_pillar=primary_pillar,
            risk_level=classify_risk(vuln_result.vulnerability),
            show_decay_warning=show_warning,
            rollover=rollover,
            breakdown=result,
        )
