# tests/conftest.py

"""
Pytest Fixtures - shared inputs for the HVQ scoring tests

Every fixture is a fresh object; the scorer must never mutate its inputs, and
tests that check this compare against a second copy.
"""

import pytest
from datetime import datetime, timezone

from humanvq.models.path import EfficiencyAudit, PathSnapshot, DelegateTask, ImmediateStep
from humanvq.models.resource import ResourceLists, ResourceRef
from humanvq.scoring.hvq_calculator import HVQCalculator


# =============================================================================
# TIME
# =============================================================================

@pytest.fixture
def as_of():
    """Fixed scoring instant so decay is deterministic."""
    return datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# PATH SNAPSHOTS
# =============================================================================

@pytest.fixture
def empty_snapshot():
    return PathSnapshot()


@pytest.fixture
def power_user_snapshot():
    """Three completed delegations, one still open."""
    return PathSnapshot(
        efficiency_audit=EfficiencyAudit(
            delegate_to_machine=[
                DelegateTask(task="Inbox triage", is_completed=True, hours_per_week=3),
                DelegateTask(task="Meeting notes", is_completed=True),
                DelegateTask(task="Weekly report", is_completed=True),
                DelegateTask(task="Invoice matching", is_completed=False),
            ]
        ),
        immediate_steps=[ImmediateStep(text="Pick a tool", is_completed=False)],
    )


# =============================================================================
# RESOURCES
# =============================================================================

@pytest.fixture
def empty_resources():
    return ResourceLists()


@pytest.fixture
def connection_course_resources():
    return ResourceLists(
        human_courses=[
            ResourceRef(id="c1", hvq_score_human=10, hvq_primary_pillar="connection"),
        ]
    )


@pytest.fixture
def paid_tool_resources():
    return ResourceLists(ai_tools=[ResourceRef(id="paid1", hvq_score_machine=8)])


@pytest.fixture
def calculator():
    return HVQCalculator()


# =============================================================================
# PERSISTED ROWS
# =============================================================================

@pytest.fixture
def manager_path_row():
    """upgrade_paths row as the storage layer returns it (JSON columns as strings)."""
    return {
        "id": "path-001",
        "role": "Manager",
        "efficiency_audit": (
            '{"delegate_to_machine": ['
            '{"task": "Status updates", "is_completed": true},'
            '{"task": "Scheduling", "is_completed": true},'
            '{"task": "Expense review", "is_completed": false}],'
            '"keep_for_human": [{"task": "1:1s", "is_completed": false, "is_fortified": true}]}'
        ),
        "immediate_steps": "[]",
        "primary_pillar": None,
        "pillar_liability": None,
        "pillar_context": None,
        "pillar_edge_case": None,
        "pillar_connection": None,
        "updated_at": "2026-03-01T12:00:00",
        "current_hvq_score": 180,
        "previous_hvq_score": 150,
    }
