"""ClusterOperator status conditions and operand versions."""

from __future__ import annotations

__all__ = (
    "AVAILABLE",
    "CONDITION_FALSE",
    "CONDITION_TRUE",
    "CONDITION_UNKNOWN",
    "FAILING",
    "PROGRESSING",
    "Condition",
    "OperandVersion",
    "find_condition",
    "format_operand_versions",
    "is_condition_false",
    "is_condition_true",
    "merge_conditions",
)

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

AVAILABLE = "Available"
PROGRESSING = "Progressing"
FAILING = "Failing"

CONDITION_TRUE = "True"
CONDITION_FALSE = "False"
CONDITION_UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Condition:
    """A single ClusterOperator status condition."""

    type: str
    status: str
    reason: str = ""
    message: str = ""

    def to_dict(self, *, last_transition_time: str) -> dict[str, str]:
        """Serialize the condition, omitting an empty reason and message
        as the API server does.
        """
        data = {
            "type": self.type,
            "status": self.status,
            "lastTransitionTime": last_transition_time,
        }
        if self.reason:
            data["reason"] = self.reason
        if self.message:
            data["message"] = self.message
        return data


@dataclass(frozen=True)
class OperandVersion:
    """The version of a named operand."""

    name: str
    version: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "version": self.version}

    def __str__(self) -> str:
        return f"{self.name}: {self.version}"


def find_condition(
    conditions: Iterable[dict[str, Any]], condition_type: str
) -> dict[str, Any] | None:
    """Find the condition of the given type in a list of raw conditions."""
    for condition in conditions:
        if condition.get("type") == condition_type:
            return condition
    return None


def is_condition_true(
    conditions: Iterable[dict[str, Any]], condition_type: str
) -> bool:
    """Return `True` if the condition is present with status ``True``."""
    condition = find_condition(conditions, condition_type)
    return condition is not None and condition.get("status") == CONDITION_TRUE


def is_condition_false(
    conditions: Iterable[dict[str, Any]], condition_type: str
) -> bool:
    """Return `True` if the condition is present with status ``False``."""
    condition = find_condition(conditions, condition_type)
    return (
        condition is not None and condition.get("status") == CONDITION_FALSE
    )


def merge_conditions(
    conditions: Sequence[Condition],
    existing: Iterable[dict[str, Any]],
    *,
    now: datetime | None = None,
) -> list[dict[str, str]]:
    """Serialize conditions, keeping the ``lastTransitionTime`` of any
    existing condition of the same type whose status has not changed.

    Parameters
    ----------
    conditions : `list` of `Condition`
        The new conditions, in output order.
    existing : `list` of `dict`
        The raw conditions currently stored on the resource.
    now : `datetime.datetime`, optional
        Transition time for changed conditions. Defaults to the current
        UTC time.

    Returns
    -------
    conditions : `list` of `dict`
        The raw conditions to store.
    """
    if now is None:
        now = datetime.now(tz=timezone.utc)
    timestamp = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    existing = list(existing)
    merged = []
    for condition in conditions:
        previous = find_condition(existing, condition.type)
        if (
            previous is not None
            and previous.get("status") == condition.status
            and previous.get("lastTransitionTime")
        ):
            transition_time = previous["lastTransitionTime"]
        else:
            transition_time = timestamp
        merged.append(condition.to_dict(last_transition_time=transition_time))
    return merged


def format_operand_versions(versions: Iterable[OperandVersion]) -> str:
    """Format versions as a comma-separated list of ``name: version``."""
    return ", ".join(str(version) for version in versions)
