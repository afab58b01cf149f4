# humanvq/scoring/vulnerability.py
"""
Vulnerability Estimator
------------------------
Maps a role and its four Human Pillars to a baseline replacement risk in [0, 1].

Pillar convention: each pillar is 0-1 and a HIGHER value means the dimension
is MORE human-centric, so high pillars lower vulnerability.

Formula:
    mean = Σ (pillar_i × w_i)            w from ROLE_PILLAR_WEIGHTS[role]
    V    = 1 − mean
    V    = V × (1 − 0.2)                 if any pillar > 0.8 ("Pillar Power")
    V    clamped to [0, 1]

Known roles weight their primary pillar 0.40 and the rest 0.20 each. An
unknown or empty role falls back to an unweighted average (0.25 each).
Neutral pillars (all 0.5) give V = 0.5 for every role.
"""
import structlog
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional, Union

from humanvq.models.path import HumanPillars, RoleProfile
from humanvq.scoring.constants import (
    GOAL_PILLAR_MAP,
    NEUTRAL_VULNERABILITY,
    PILLAR_ORDER,
    PILLAR_POWER_REDUCTION,
    PILLAR_POWER_THRESHOLD,
    ROLE_PILLAR_WEIGHTS,
    UNIFORM_PILLAR_WEIGHTS,
)
from humanvq.scoring.utils import clamp, safe_decimal, weighted_mean

logger = structlog.get_logger(__name__)

PillarInput = Union[HumanPillars, Mapping[str, float], None]


@dataclass
class VulnerabilityResult:
    """Output of VulnerabilityEstimator.calculate()."""
    vulnerability: Decimal        # Final value in [0, 1]
    pillar_mean: Decimal          # Weighted pillar mean before inversion
    pillar_power: bool            # True when any pillar > PILLAR_POWER_THRESHOLD
    role_matched: bool            # False when the neutral weighting was used
    weights: Mapping[str, Decimal]


def role_weights(role: Optional[str]) -> Mapping[str, Decimal]:
    """Pillar weights for a role, falling back to equal weights."""
    key = (role or "").strip().lower()
    return ROLE_PILLAR_WEIGHTS.get(key, UNIFORM_PILLAR_WEIGHTS)


def _pillar_values(pillars: PillarInput) -> dict[str, Decimal]:
    if isinstance(pillars, HumanPillars):
        raw = pillars.as_dict()
    elif pillars is None:
        raw = {}
    else:
        raw = dict(pillars)
        # accept the snake_case spelling used by persisted columns
        if "edgeCase" not in raw and "edge_case" in raw:
            raw["edgeCase"] = raw["edge_case"]
    return {
        name: clamp(safe_decimal(raw.get(name), NEUTRAL_VULNERABILITY))
        for name in PILLAR_ORDER
    }


class VulnerabilityEstimator:
    """Estimate automation vulnerability from role and Human Pillars."""

    def calculate(self, role: Optional[str], pillars: PillarInput) -> VulnerabilityResult:
        """
        Args:
            role: Role or focus-area label (e.g. "Nurse"). Case-insensitive;
                  unrecognised labels use equal pillar weights.
            pillars: HumanPillars, or a mapping keyed by pillar name.
                     Missing or malformed pillars count as neutral (0.5).

        Returns:
            VulnerabilityResult with the final value and its breakdown.

        Examples:
            >>> VulnerabilityEstimator().calculate("Nurse", HumanPillars()).vulnerability
            Decimal('0.5000')
        """
        values = _pillar_values(pillars)
        weights = role_weights(role)
        role_matched = weights is not UNIFORM_PILLAR_WEIGHTS

        mean = weighted_mean(
            [values[p] for p in PILLAR_ORDER],
            [weights[p] for p in PILLAR_ORDER],
        )
        v = Decimal("1") - mean

        pillar_power = any(val > PILLAR_POWER_THRESHOLD for val in values.values())
        if pillar_power:
            v *= Decimal("1") - PILLAR_POWER_REDUCTION

        v = clamp(v).quantize(Decimal("0.0001"))

        logger.debug(
            "vulnerability_calculated",
            role=role,
            role_matched=role_matched,
            pillars={k: float(val) for k, val in values.items()},
            pillar_mean=float(mean),
            pillar_power=pillar_power,
            vulnerability=float(v),
        )

        return VulnerabilityResult(
            vulnerability=v,
            pillar_mean=mean,
            pillar_power=pillar_power,
            role_matched=role_matched,
            weights=weights,
        )

    def calculate_for(self, profile: RoleProfile) -> VulnerabilityResult:
        """Same as calculate() for a RoleProfile."""
        return self.calculate(profile.role, profile.pillars)


_estimator = VulnerabilityEstimator()


def calculate_vulnerability_breakdown(
    role: Optional[str], pillars: PillarInput
) -> VulnerabilityResult:
    return _estimator.calculate(role, pillars)


def calculate_vulnerability(role: Optional[str], pillars: PillarInput) -> float:
    """Baseline vulnerability in [0, 1] for a role and its Human Pillars."""
    return float(_estimator.calculate(role, pillars).vulnerability)


_PILLAR_VALUES = frozenset(PILLAR_ORDER)
_GOAL_PILLAR_LOOKUP = {role.lower(): pillar for role, pillar in GOAL_PILLAR_MAP.items()}


def resolve_primary_pillar(role: Optional[str], explicit: Optional[str] = None) -> Optional[str]:
    """
    The pillar that defines a role's human moat.

    An explicit assignment from upstream analysis wins when it names a real
    pillar; otherwise GOAL_PILLAR_MAP is consulted (case-insensitive).
    """
    explicit = getattr(explicit, "value", explicit)
    if explicit and explicit in _PILLAR_VALUES:
        return explicit
    return _GOAL_PILLAR_LOOKUP.get((role or "").strip().lower())
