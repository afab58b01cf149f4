"""
HumanVQ — Human Value Quotient scoring engine.

Scores how defensible a role is against automation, given the tools a user
has adopted, the courses and tasks they have completed, and the role's
human-pillar profile.
"""

from humanvq.scoring import (
    GOAL_PILLAR_MAP,
    IMPACT_WEIGHTS,
    calculate_hvq_score,
    calculate_vulnerability,
)

__version__ = "1.0.0"

__all__ = [
    "GOAL_PILLAR_MAP",
    "IMPACT_WEIGHTS",
    "calculate_hvq_score",
    "calculate_vulnerability",
]
