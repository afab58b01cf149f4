# tests/test_hvq_calculator.py

"""
HVQ Calculator Tests - reference scenarios, bonuses, decay and defaults
"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from humanvq.models.path import DelegateTask, EfficiencyAudit, ImmediateStep, PathSnapshot
from humanvq.models.resource import ResourceLists, ResourceRef
from humanvq.scoring.constants import VULNERABILITY_HIGH_RISK_THRESHOLD
from humanvq.scoring.hvq_calculator import calculate_hvq_score

ONE_MONTH = timedelta(seconds=2629800)


def delegations(completed: int, open_: int = 0) -> PathSnapshot:
    tasks = [DelegateTask(is_completed=True) for _ in range(completed)]
    tasks += [DelegateTask(is_completed=False) for _ in range(open_)]
    return PathSnapshot(efficiency_audit=EfficiencyAudit(delegate_to_machine=tasks))


# REFERENCE SCENARIOS


class TestReferenceScenarios:
    """The documented worked examples."""

    def test_high_risk_no_action(self, empty_snapshot, empty_resources):
        """V=0.9, nothing adopted: 50 / 0.9 ≈ 55.6."""
        score = calculate_hvq_score(empty_snapshot, empty_resources, {}, 0.9, {})
        assert 10 <= score <= 60
        assert score == 56

    def test_ai_power_user(self, power_user_snapshot, paid_tool_resources, calculator):
        """V=0.8 → 0.08 per task; 3 tasks, 1 paid tool: 75 / 0.56 ≈ 133.9."""
        vuln = 0.8
        assert Decimal(str(vuln)) > VULNERABILITY_HIGH_RISK_THRESHOLD

        result = calculator.calculate(
            power_user_snapshot, paid_tool_resources, {}, vuln, {"paid1": "added_paid"}
        )
        assert result.human_floor == Decimal("50")
        assert result.ai_leverage == Decimal("1.5")
        assert result.delegation_bonus == Decimal("0.24")
        assert result.denominator == Decimal("0.56")
        assert result.hvq_score == 134
        assert result.hvq_score >= 130
        assert result.hvq_score > 115

    def test_moat_builder_matched_pillar(self, empty_snapshot, connection_course_resources):
        score = calculate_hvq_score(
            empty_snapshot,
            connection_course_resources,
            {"c1": 1},
            0.5,
            {"c1": "added_completed"},
            "connection",
        )
        assert score == 140

    def test_moat_builder_mismatched_pillar(self, empty_snapshot, connection_course_resources):
        matched = calculate_hvq_score(
            empty_snapshot, connection_course_resources, {"c1": 1}, 0.5,
            {"c1": "added_completed"}, "connection",
        )
        mismatched = calculate_hvq_score(
            empty_snapshot, connection_course_resources, {"c1": 1}, 0.5,
            {"c1": "added_completed"}, "liability",
        )
        assert mismatched == 120
        assert matched == mismatched + 20

    def test_json_round_trip(self, power_user_snapshot, paid_tool_resources, as_of):
        """Scoring a snapshot restored from JSON matches the in-memory one."""
        power_user_snapshot.updated_at = as_of - 2 * ONE_MONTH
        restored = PathSnapshot.model_validate_json(power_user_snapshot.model_dump_json())
        restored_resources = ResourceLists.model_validate_json(paid_tool_resources.model_dump_json())

        args = ({}, 0.8, {"paid1": "added_paid"}, None)
        original = calculate_hvq_score(
            power_user_snapshot, paid_tool_resources, *args,
            power_user_snapshot.updated_at, as_of=as_of,
        )
        round_tripped = calculate_hvq_score(
            restored, restored_resources, *args, restored.updated_at, as_of=as_of,
        )
        assert original == round_tripped

    def test_zero_state_baseline(self, empty_snapshot, empty_resources):
        assert calculate_hvq_score(empty_snapshot, empty_resources, {}, 0.5, {}) == 100


# HUMAN FLOOR


class TestHumanFloor:

    def test_weight_from_status_when_not_persisted(self, empty_snapshot, connection_course_resources):
        """added_completed weighs 1.5: 50 + 10 × 1.5 = 65 → 130."""
        score = calculate_hvq_score(
            empty_snapshot, connection_course_resources, {}, 0.5, {"c1": "added_completed"}
        )
        assert score == 130

    def test_status_weight_with_moat(self, empty_snapshot, connection_course_resources):
        """50 + 10 × 1.5 × 2 = 80 → 160."""
        score = calculate_hvq_score(
            empty_snapshot, connection_course_resources, {}, 0.5,
            {"c1": "added_completed"}, "connection",
        )
        assert score == 160

    @pytest.mark.parametrize("status", ["suggested", "wishlisted", "added_enrolled"])
    def test_unadopted_course_adds_nothing(self, empty_snapshot, connection_course_resources, status):
        score = calculate_hvq_score(
            empty_snapshot, connection_course_resources, {"c1": 1}, 0.5,
            {"c1": status}, "connection",
        )
        assert score == 100

    def test_freshly_generated_path_stays_at_baseline(self, empty_snapshot):
        """Generated courses start as suggested; nothing is adopted yet."""
        resources = ResourceLists(human_courses=[
            ResourceRef(id=f"c{i}", hvq_score_human=10, hvq_primary_pillar="connection")
            for i in range(3)
        ])
        status = {f"c{i}": "suggested" for i in range(3)}
        assert calculate_hvq_score(empty_snapshot, resources, {}, 0.5, status, "connection") == 100

    def test_wishlisting_does_not_raise_score(self, empty_snapshot):
        resources = ResourceLists(human_courses=[ResourceRef(id="c1", hvq_score_human=50)])
        assert calculate_hvq_score(empty_snapshot, resources, {}, 0.5, {"c1": "wishlisted"}) == 100

    def test_removed_course_contributes_nothing(self, empty_snapshot, connection_course_resources):
        score = calculate_hvq_score(
            empty_snapshot, connection_course_resources, {"c1": 1.5}, 0.5,
            {"c1": "removed"}, "connection",
        )
        assert score == 100

    def test_course_missing_from_status_map(self, empty_snapshot, connection_course_resources):
        score = calculate_hvq_score(
            empty_snapshot, connection_course_resources, {"c1": 1}, 0.5, {}, "connection"
        )
        assert score == 100

    def test_course_without_id_is_ignored(self, empty_snapshot):
        resources = ResourceLists(human_courses=[ResourceRef(hvq_score_human=50)])
        assert calculate_hvq_score(empty_snapshot, resources, {}, 0.5, {"": "added_completed"}) == 100

    def test_no_moat_when_both_pillars_missing(self, empty_snapshot):
        resources = ResourceLists(human_courses=[ResourceRef(id="c2", hvq_score_human=10)])
        score = calculate_hvq_score(
            empty_snapshot, resources, {"c2": 1}, 0.5, {"c2": "added_completed"}, None
        )
        assert score == 120


# AI LEVERAGE


class TestAILeverage:

    @pytest.mark.parametrize(
        "statuses, expected",
        [
            ({}, 100),
            ({"t1": "added_free"}, 110),
            ({"t1": "added_paid"}, 150),
            ({"t1": "added_paid", "t2": "added_paid"}, 150),
            ({"t1": "added_paid", "t2": "added_free"}, 165),
            ({"t1": "wishlisted", "t2": "suggested"}, 100),
            ({"t1": "removed"}, 100),
        ],
    )
    def test_tiers(self, empty_snapshot, statuses, expected):
        resources = ResourceLists(ai_tools=[ResourceRef(id="t1"), ResourceRef(id="t2")])
        assert calculate_hvq_score(empty_snapshot, resources, {}, 0.5, statuses) == expected


# DELEGATION AND EXECUTION


class TestDelegationBonus:

    def test_low_risk_rate(self, empty_resources, calculator):
        """V=0.5: 2 × 0.05 = 0.1 → 50 / 0.4 = 125."""
        result = calculator.calculate(delegations(2, open_=3), empty_resources, {}, 0.5, {})
        assert result.delegation_bonus == Decimal("0.10")
        assert result.hvq_score == 125

    def test_threshold_itself_is_low_risk(self, empty_resources, calculator):
        result = calculator.calculate(delegations(1), empty_resources, {}, 0.7, {})
        assert result.delegation_bonus == Decimal("0.05")

    def test_bonus_capped_at_min_denominator(self, empty_resources, calculator):
        result = calculator.calculate(delegations(10), empty_resources, {}, 0.3, {})
        assert result.delegation_bonus == Decimal("0.29")
        assert result.denominator == Decimal("0.01")
        assert result.hvq_score == 1000


class TestExecutionBonus:

    def test_completed_steps_add_flat_points(self, empty_resources):
        snapshot = PathSnapshot(
            immediate_steps=[
                ImmediateStep(text="Book course", is_completed=True),
                ImmediateStep(text="Try tool", is_completed=True),
                ImmediateStep(text="Share plan", is_completed=False),
            ]
        )
        assert calculate_hvq_score(snapshot, empty_resources, {}, 0.5, {}) == 130


# TIME DECAY


class TestKnowledgeDecay:

    def test_one_month_stale(self, empty_snapshot, empty_resources, as_of):
        score = calculate_hvq_score(
            empty_snapshot, empty_resources, {}, 0.5, {}, None, as_of - ONE_MONTH, as_of=as_of
        )
        assert score == 95

    def test_two_months_stale(self, empty_snapshot, empty_resources, as_of):
        score = calculate_hvq_score(
            empty_snapshot, empty_resources, {}, 0.5, {}, None, as_of - 2 * ONE_MONTH, as_of=as_of
        )
        assert score == 90

    def test_no_decay_without_as_of(self, empty_snapshot, empty_resources, as_of):
        score = calculate_hvq_score(
            empty_snapshot, empty_resources, {}, 0.5, {}, None, as_of - 12 * ONE_MONTH
        )
        assert score == 100

    def test_no_decay_without_last_update(self, empty_snapshot, empty_resources, as_of):
        assert calculate_hvq_score(
            empty_snapshot, empty_resources, {}, 0.5, {}, None, None, as_of=as_of
        ) == 100

    def test_future_update_does_not_boost(self, empty_snapshot, empty_resources, as_of, calculator):
        result = calculator.calculate(
            empty_snapshot, empty_resources, {}, 0.5, {}, None, as_of + ONE_MONTH, as_of=as_of
        )
        assert result.months_since_update == 0
        assert result.decay_factor == 1
        assert result.hvq_score == 100

    def test_naive_timestamp_treated_as_utc(self, empty_snapshot, empty_resources):
        last = datetime(2026, 1, 1, 0, 0, 0)
        as_of = datetime(2026, 1, 1, tzinfo=timezone.utc) + ONE_MONTH
        assert calculate_hvq_score(
            empty_snapshot, empty_resources, {}, 0.5, {}, None, last, as_of=as_of
        ) == 95

    def test_long_neglect_hits_floor(self, empty_snapshot, empty_resources, as_of):
        score = calculate_hvq_score(
            empty_snapshot, empty_resources, {}, 1.0, {}, None, as_of - 120 * ONE_MONTH, as_of=as_of
        )
        assert score == 10


# BOUNDS AND DEFENSIVE DEFAULTS


class TestBoundsAndDefaults:

    def test_zero_vulnerability_capped(self, empty_snapshot, empty_resources):
        assert calculate_hvq_score(empty_snapshot, empty_resources, {}, 0.0, {}) == 1000

    def test_all_optional_inputs_missing(self):
        assert calculate_hvq_score(None, None, None, 0.5, None) == 100

    @pytest.mark.parametrize("bad", [float("nan"), None, "high"])
    def test_malformed_vulnerability_is_neutral(self, bad):
        assert calculate_hvq_score(None, None, None, bad, None) == 100

    def test_out_of_range_vulnerability_clamped(self):
        assert calculate_hvq_score(None, None, None, 1.7, None) == 50

    def test_inputs_not_mutated(self, power_user_snapshot, paid_tool_resources):
        before = (power_user_snapshot.model_dump(), paid_tool_resources.model_dump())
        status = {"paid1": "added_paid"}
        calculate_hvq_score(power_user_snapshot, paid_tool_resources, {}, 0.8, status)
        assert (power_user_snapshot.model_dump(), paid_tool_resources.model_dump()) == before
        assert status == {"paid1": "added_paid"}
