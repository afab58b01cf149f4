# humanvq/scoring/resource_status.py
"""
Resource status → impact weight.

The status writer (when a user adds, pays for, completes or removes a
resource) and the HVQ scorer both derive weights through impact_weight(), so
a persisted impact_weight always matches what the scorer would compute.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional, Union

from humanvq.core.exceptions import InvalidResourceStatusError, UnknownResourceTypeError
from humanvq.models.enumerations import ResourceStatus, ResourceType
from humanvq.scoring.constants import IMPACT_WEIGHTS

TOOL_STATUSES = (
    ResourceStatus.SUGGESTED,
    ResourceStatus.ADDED_FREE,
    ResourceStatus.ADDED_PAID,
    ResourceStatus.WISHLISTED,
    ResourceStatus.REMOVED,
)

COURSE_STATUSES = (
    ResourceStatus.SUGGESTED,
    ResourceStatus.ADDED_ENROLLED,
    ResourceStatus.ADDED_COMPLETED,
    ResourceStatus.WISHLISTED,
    ResourceStatus.REMOVED,
)

_ALLOWED = {
    ResourceType.AI_TOOL: TOOL_STATUSES,
    ResourceType.HUMAN_COURSE: COURSE_STATUSES,
}


@dataclass(frozen=True)
class StatusUpdate:
    """Row values the status writer persists for a path resource."""
    status: ResourceStatus
    impact_weight: Decimal


def impact_weight(status: Union[ResourceStatus, str, None]) -> Decimal:
    """Impact weight for a status; unknown or missing statuses weigh 0."""
    if status is None:
        return Decimal("0")
    key = status.value if isinstance(status, ResourceStatus) else str(status)
    return IMPACT_WEIGHTS.get(key, Decimal("0"))


def validate_status(
    resource_type: Union[ResourceType, str],
    status: Union[ResourceStatus, str],
) -> ResourceStatus:
    """
    Check that a status is allowed for a resource type.

    Tools move between suggested/free/paid/wishlisted/removed; courses between
    suggested/enrolled/completed/wishlisted/removed.

    Raises:
        UnknownResourceTypeError: resource_type is not ai_tool or human_course.
        InvalidResourceStatusError: status is not allowed for that type.
    """
    try:
        rtype = ResourceType(resource_type)
    except ValueError:
        raise UnknownResourceTypeError(str(resource_type)) from None

    allowed = _ALLOWED[rtype]
    allowed_values = [s.value for s in allowed]
    status_value = status.value if isinstance(status, ResourceStatus) else str(status)
    if status_value not in allowed_values:
        raise InvalidResourceStatusError(rtype.value, status_value, allowed_values)
    return ResourceStatus(status_value)


def build_status_update(
    resource_type: Union[ResourceType, str],
    status: Union[ResourceStatus, str],
) -> StatusUpdate:
    """Validate a status change and attach its impact weight."""
    validated = validate_status(resource_type, status)
    return StatusUpdate(status=validated, impact_weight=impact_weight(validated))


def status_of(resource_id: Optional[str], resource_status: Mapping) -> Optional[str]:
    """Status string for a resource id, or None when absent."""
    if not resource_id:
        return None
    value = resource_status.get(resource_id)
    if isinstance(value, ResourceStatus):
        return value.value
    return value
