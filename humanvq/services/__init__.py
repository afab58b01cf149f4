from humanvq.services.path_scoring_service import PathScore, PathScoringService
from humanvq.services.snapshot_parser import (
    parse_efficiency_audit,
    parse_immediate_steps,
    parse_path_snapshot,
    parse_pillars,
    parse_timestamp,
)

__all__ = [
    "PathScore",
    "PathScoringService",
    "parse_efficiency_audit",
    "parse_immediate_steps",
    "parse_path_snapshot",
    "parse_pillars",
    "parse_timestamp",
]
