# humanvq/scoring/score_trend.py
"""
Score trend helpers for callers that persist and display HVQ scores.

- Knowledge-decay warning: the freshly computed score fell below the last
  persisted one.
- Rollover: previous_hvq_score ← current_hvq_score, current ← new.
- Scoreboard: average of a user's path scores and the change since the
  previous round.
- Banding of scores and vulnerabilities for badges and gauges.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_CEILING
from typing import Iterable, Mapping, Optional, Union

from humanvq.models.enumerations import RiskLevel, ScoreBand
from humanvq.scoring.constants import (
    HVQ_DECAY_RATE,
    VULNERABILITY_HIGH_RISK_THRESHOLD,
    VULNERABILITY_MODERATE_RISK_THRESHOLD,
)
from humanvq.scoring.utils import round_half_up, safe_decimal

# Paths under this score are counted as needing attention on the scoreboard.
AT_RISK_SCORE = 120
DEFAULT_OVERALL_SCORE = 100

SCORE_BANDS = (
    (200, ScoreBand.STRONG),
    (150, ScoreBand.SOLID),
    (100, ScoreBand.BUILDING),
)


@dataclass(frozen=True)
class ScoreRollover:
    previous_hvq_score: Optional[int]
    current_hvq_score: int


@dataclass
class ScoreboardSummary:
    overall_score: int
    delta_percent: Optional[Decimal]   # one decimal place, None without history
    path_count: int
    at_risk_count: int


def should_show_decay_warning(
    calculated_score: Optional[int],
    last_recorded_score: Optional[int],
) -> bool:
    """True when the calculated score dropped below the last persisted score."""
    if calculated_score is None or last_recorded_score is None:
        return False
    return calculated_score < last_recorded_score


def decay_rate_percent() -> int:
    """HVQ_DECAY_RATE as a whole percentage, e.g. 5."""
    return int(HVQ_DECAY_RATE * 100)


def roll_scores(current_score: Optional[int], new_score: int) -> ScoreRollover:
    return ScoreRollover(previous_hvq_score=current_score, current_hvq_score=new_score)


def _mean(values: list[Decimal]) -> Decimal:
    return sum(values, Decimal("0")) / len(values)


def _percent_change(new: Decimal, old: Decimal) -> Decimal:
    return ((new - old) / old * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_CEILING)


def summarize_scores(
    paths: Iterable[Mapping[str, object]],
    profile_current: Optional[int] = None,
    profile_previous: Optional[int] = None,
) -> ScoreboardSummary:
    """
    Aggregate path scores into a user's overall HVQ.

    Args:
        paths: Rows carrying current_hvq_score / previous_hvq_score (None allowed).
        profile_current: Profile-level score used when no path has a score.
        profile_previous: Profile-level previous score used when no path has one.

    Returns:
        ScoreboardSummary. overall_score is the rounded mean of current
        scores; delta_percent compares it with the mean of previous scores.
    """
    rows = list(paths)
    current = [safe_decimal(r.get("current_hvq_score")) for r in rows
               if r.get("current_hvq_score") is not None]
    previous = [safe_decimal(r.get("previous_hvq_score")) for r in rows
                if r.get("previous_hvq_score") is not None]

    if current:
        overall = round_half_up(_mean(current))
    elif profile_current is not None:
        overall = int(profile_current)
    else:
        overall = DEFAULT_OVERALL_SCORE

    delta: Optional[Decimal] = None
    if previous and current:
        previous_avg = _mean(previous)
        if previous_avg > 0:
            delta = _percent_change(Decimal(overall), previous_avg)
    elif profile_previous is not None and profile_previous > 0:
        delta = _percent_change(Decimal(overall), Decimal(profile_previous))

    at_risk = sum(1 for score in current if score < AT_RISK_SCORE)

    return ScoreboardSummary(
        overall_score=overall,
        delta_percent=delta,
        path_count=len(rows),
        at_risk_count=at_risk,
    )


def score_band(score: int) -> ScoreBand:
    for threshold, band in SCORE_BANDS:
        if score >= threshold:
            return band
    return ScoreBand.AT_RISK


def risk_percent(vulnerability: Union[float, Decimal]) -> int:
    """Vulnerability as a rounded percentage (0.734 → 73)."""
    return round_half_up(safe_decimal(vulnerability) * 100)


def classify_risk(vulnerability: Union[float, Decimal]) -> RiskLevel:
    v = safe_decimal(vulnerability)
    if v > VULNERABILITY_HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    if v > VULNERABILITY_MODERATE_RISK_THRESHOLD:
        return RiskLevel.MODERATE
    return RiskLevel.LOW
