"""Tests for the clusterstatusoperator.conditions module."""

from datetime import datetime, timezone

from clusterstatusoperator.conditions import (
    AVAILABLE,
    FAILING,
    PROGRESSING,
    Condition,
    OperandVersion,
    format_operand_versions,
    is_condition_false,
    is_condition_true,
    merge_conditions,
)


def test_condition_predicates() -> None:
    conditions = [
        {"type": "Available", "status": "True"},
        {"type": "Failing", "status": "False"},
        {"type": "Progressing", "status": "Unknown"},
    ]
    assert is_condition_true(conditions, AVAILABLE)
    assert is_condition_false(conditions, FAILING)
    assert not is_condition_true(conditions, PROGRESSING)
    assert not is_condition_false(conditions, PROGRESSING)
    assert not is_condition_true(conditions, "Degraded")
    assert not is_condition_false(conditions, "Degraded")


def test_format_operand_versions() -> None:
    versions = [
        OperandVersion("operator", "4.1.0"),
        OperandVersion("cluster-autoscaler", "4.1.1"),
    ]
    assert (
        format_operand_versions(versions)
        == "operator: 4.1.0, cluster-autoscaler: 4.1.1"
    )
    assert format_operand_versions([]) == ""


def test_condition_to_dict_omits_empty_fields() -> None:
    condition = Condition(PROGRESSING, "False")
    assert condition.to_dict(last_transition_time="t") == {
        "type": "Progressing",
        "status": "False",
        "lastTransitionTime": "t",
    }


def test_merge_conditions_keeps_transition_time_for_unchanged_status() -> None:
    existing = [
        {
            "type": "Available",
            "status": "True",
            "lastTransitionTime": "2019-01-01T00:00:00Z",
        },
        {
            "type": "Failing",
            "status": "False",
            "lastTransitionTime": "2019-01-01T00:00:00Z",
        },
    ]
    now = datetime(2019, 6, 1, 12, 30, tzinfo=timezone.utc)
    merged = merge_conditions(
        [
            Condition(AVAILABLE, "True"),
            Condition(PROGRESSING, "False"),
            Condition(FAILING, "True", "MissingDependency", "not ready"),
        ],
        existing,
        now=now,
    )
    assert merged == [
        {
            "type": "Available",
            "status": "True",
            "lastTransitionTime": "2019-01-01T00:00:00Z",
        },
        {
            "type": "Progressing",
            "status": "False",
            "lastTransitionTime": "2019-06-01T12:30:00Z",
        },
        {
            "type": "Failing",
            "status": "True",
            "reason": "MissingDependency",
            "message": "not ready",
            "lastTransitionTime": "2019-06-01T12:30:00Z",
        },
    ]
