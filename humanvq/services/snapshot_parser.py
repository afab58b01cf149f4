"""
Snapshot Parser
humanvq/services/snapshot_parser.py

Turns a persisted upgrade_paths row into the typed models the scorer reads.

efficiency_audit and immediate_steps arrive either as JSON strings or as
already-decoded structures. Every parser here fails soft: a bad field is
logged and replaced by an empty structure so scoring can continue.
"""

import json
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

import structlog
from pydantic import TypeAdapter, ValidationError

from humanvq.core.exceptions import SnapshotParseError
from humanvq.models.path import (
    DelegateTask,
    EfficiencyAudit,
    HumanPillars,
    ImmediateStep,
    KeepForHumanTask,
    PathRecord,
    PathSnapshot,
)
from humanvq.scoring.utils import clamp, safe_decimal

logger = structlog.get_logger(__name__)

_DATETIME = TypeAdapter(datetime)

RawRecord = Union[PathRecord, dict]


def _decode(raw: Any, field: str) -> Any:
    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        if not raw.strip():
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise SnapshotParseError(field, f"invalid JSON ({e.msg})") from e
    return raw


def _valid_items(items: Any, model, field: str) -> list:
    """Validate list items individually, dropping the ones that fail."""
    if items is None:
        return []
    if not isinstance(items, list):
        raise SnapshotParseError(field, f"expected a list, got {type(items).__name__}")
    parsed = []
    for index, item in enumerate(items):
        try:
            parsed.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning("snapshot_item_dropped", field=field, index=index, errors=e.error_count())
    return parsed


def parse_efficiency_audit(raw: Any) -> EfficiencyAudit:
    """Decode efficiency_audit; malformed input yields an empty audit."""
    try:
        data = _decode(raw, "efficiency_audit")
        if data is None:
            return EfficiencyAudit()
        if not isinstance(data, dict):
            raise SnapshotParseError(
                "efficiency_audit", f"expected an object, got {type(data).__name__}"
            )
        return EfficiencyAudit(
            delegate_to_machine=_valid_items(
                data.get("delegate_to_machine"), DelegateTask, "efficiency_audit.delegate_to_machine"
            ),
            keep_for_human=_valid_items(
                data.get("keep_for_human"), KeepForHumanTask, "efficiency_audit.keep_for_human"
            ),
        )
    except SnapshotParseError as e:
        logger.warning("efficiency_audit_parse_failed", field=e.field, reason=e.reason)
        return EfficiencyAudit()


def parse_immediate_steps(raw: Any) -> List[ImmediateStep]:
    """Decode immediate_steps; malformed input yields an empty list."""
    try:
        return _valid_items(_decode(raw, "immediate_steps"), ImmediateStep, "immediate_steps")
    except SnapshotParseError as e:
        logger.warning("immediate_steps_parse_failed", field=e.field, reason=e.reason)
        return []


def parse_timestamp(raw: Any) -> Optional[datetime]:
    """
    Parse a timestamp to an aware UTC datetime.

    Accepts datetime, ISO-8601 strings (offset-less strings are UTC) and
    epoch milliseconds. Anything else yields None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, datetime):
        return raw.replace(tzinfo=timezone.utc) if raw.tzinfo is None else raw.astimezone(timezone.utc)
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.warning("timestamp_parse_failed", value=raw)
            return None
    s = str(raw).strip()
    if not s:
        return None
    try:
        parsed = _DATETIME.validate_python(s)
    except ValidationError:
        logger.warning("timestamp_parse_failed", value=s)
        return None
    return parsed.replace(tzinfo=timezone.utc) if parsed.tzinfo is None else parsed.astimezone(timezone.utc)


def as_path_record(record: RawRecord) -> PathRecord:
    if isinstance(record, PathRecord):
        return record
    try:
        return PathRecord.model_validate(record)
    except ValidationError as e:
        # keep what validates so one bad column does not discard the row
        logger.warning("path_record_invalid", errors=e.error_count())
        bad = {err["loc"][0] for err in e.errors() if err["loc"]}
        return PathRecord.model_validate({k: v for k, v in dict(record).items() if k not in bad})


def parse_pillars(record: RawRecord) -> HumanPillars:
    """Read the four pillar_* columns; missing ones are neutral (0.5)."""
    rec = as_path_record(record)
    neutral = safe_decimal(0.5)

    def pillar(value: Optional[float]) -> float:
        return float(clamp(safe_decimal(value, neutral)))

    return HumanPillars(
        liability=pillar(rec.pillar_liability),
        context=pillar(rec.pillar_context),
        edge_case=pillar(rec.pillar_edge_case),
        connection=pillar(rec.pillar_connection),
    )


def parse_path_snapshot(record: RawRecord) -> PathSnapshot:
    """Build the scorer's PathSnapshot from a persisted row."""
    rec = as_path_record(record)
    return PathSnapshot(
        efficiency_audit=parse_efficiency_audit(rec.efficiency_audit),
        immediate_steps=parse_immediate_steps(rec.immediate_steps),
        updated_at=parse_timestamp(rec.updated_at),
    )
