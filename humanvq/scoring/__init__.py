"""
scoring/ — HVQ Scoring Engine

Modules:
    utils.py            - Decimal utilities
    constants.py        - Rates, impact weights, goal→pillar map
    resource_status.py  - Status → impact weight, status validation
    vulnerability.py    - Vulnerability Estimator
    hvq_calculator.py   - HVQ Scorer
    score_trend.py      - Decay warning, rollover, scoreboard, risk bands
"""

from humanvq.scoring.constants import (
    GOAL_PILLAR_MAP,
    HVQ_DECAY_RATE,
    IMPACT_WEIGHTS,
    VULNERABILITY_HIGH_RISK_THRESHOLD,
)
from humanvq.scoring.hvq_calculator import HVQCalculator, HVQResult, calculate_hvq_score
from humanvq.scoring.resource_status import build_status_update, impact_weight, validate_status
from humanvq.scoring.vulnerability import (
    VulnerabilityEstimator,
    VulnerabilityResult,
    calculate_vulnerability,
    calculate_vulnerability_breakdown,
    resolve_primary_pillar,
)

__all__ = [
    "GOAL_PILLAR_MAP",
    "HVQ_DECAY_RATE",
    "IMPACT_WEIGHTS",
    "VULNERABILITY_HIGH_RISK_THRESHOLD",
    "HVQCalculator",
    "HVQResult",
    "calculate_hvq_score",
    "build_status_update",
    "impact_weight",
    "validate_status",
    "VulnerabilityEstimator",
    "VulnerabilityResult",
    "calculate_vulnerability",
    "calculate_vulnerability_breakdown",
    "resolve_primary_pillar",
]
