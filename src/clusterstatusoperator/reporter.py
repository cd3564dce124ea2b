"""Report the operator's health through its ClusterOperator status."""

from __future__ import annotations

__all__ = ("PollOutcome", "StatusReporter")

import enum
import threading
import time
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

import structlog

from clusterstatusoperator.conditions import (
    AVAILABLE,
    CONDITION_FALSE,
    CONDITION_TRUE,
    FAILING,
    PROGRESSING,
    Condition,
    OperandVersion,
    format_operand_versions,
    merge_conditions,
)
from clusterstatusoperator.config import ReporterConfig
from clusterstatusoperator.dependency import check_dependency
from clusterstatusoperator.equality import deep_equal, versions_differ
from clusterstatusoperator.store import ClusterOperatorStore


class PollOutcome(enum.Enum):
    """How `StatusReporter.report` finished."""

    SUCCESS = "success"
    """The operator was reported as available."""

    CANCELLED = "cancelled"
    """The stop event was set before the operator became available."""


class StatusReporter:
    """Report the status of the operator to the cluster-version operator
    via its ClusterOperator resource.

    Parameters
    ----------
    store : `clusterstatusoperator.store.ClusterOperatorStore`
        Store for the ClusterOperator resources.
    config : `clusterstatusoperator.config.ReporterConfig`
        Resource names, reasons, and the poll interval.
    related_objects : `list` of `dict`, optional
        References written unchanged into ``status.relatedObjects``. Defaults
        to ``config.related_objects``.
    desired_versions : callable, optional
        Returns the operand versions the operator should be at. Defaults to
        the versions this operator reports.
    clock : callable, optional
        Returns the current time for condition transition times.
    """

    def __init__(
        self,
        *,
        store: ClusterOperatorStore,
        config: ReporterConfig,
        related_objects: Sequence[dict[str, Any]] | None = None,
        desired_versions: Callable[[], list[OperandVersion]] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.config = config
        if related_objects is None:
            related_objects = config.related_objects
        self.related_objects = [dict(ref) for ref in related_objects]
        self._desired_versions = desired_versions or self.reported_versions
        self._clock = clock
        self._logger = structlog.get_logger(__name__).bind(
            clusteroperator=config.operator_name
        )

    def reported_versions(self) -> list[OperandVersion]:
        """Versions written into ``status.versions``."""
        return [
            OperandVersion(
                name=self.config.operand_name,
                version=self.config.operand_version,
            )
        ]

    def apply_conditions(self, conditions: Sequence[Condition]) -> bool:
        """Apply the given conditions to the ClusterOperator status.

        The status is only written if it differs from the stored status.

        Returns
        -------
        written : `bool`
            `True` if the status was updated.

        Raises
        ------
        kubernetes.client.exceptions.ApiException
            Raised if the ClusterOperator can't be read, created or updated.
        """
        clusteroperator = self.store.get_or_create()
        current = clusteroperator.get("status") or {}

        now = self._clock() if self._clock is not None else None
        status = {
            "versions": [v.to_dict() for v in self.reported_versions()],
            "relatedObjects": [dict(ref) for ref in self.related_objects],
            "conditions": merge_conditions(
                conditions, current.get("conditions") or [], now=now
            ),
        }

        if deep_equal(_normalize_status(current), _normalize_status(status)):
            self._logger.debug("ClusterOperator status is unchanged")
            return False

        updated = dict(clusteroperator)
        updated["status"] = status
        self.store.update_status(updated)
        self._logger.info(
            "Updated ClusterOperator status",
            conditions={c.type: c.status for c in conditions},
        )
        return True

    def available(self, reason: str, message: str) -> bool:
        """Report the operator as available, not progressing, and not
        failing.
        """
        return self.apply_conditions(
            [
                Condition(AVAILABLE, CONDITION_TRUE, reason, message),
                Condition(PROGRESSING, CONDITION_FALSE),
                Condition(FAILING, CONDITION_FALSE),
            ]
        )

    def fail(self, reason: str, message: str) -> bool:
        """Report the operator as failing but available, and not
        progressing.
        """
        return self.apply_conditions(
            [
                Condition(AVAILABLE, CONDITION_TRUE),
                Condition(PROGRESSING, CONDITION_FALSE),
                Condition(FAILING, CONDITION_TRUE, reason, message),
            ]
        )

    def progressing(self, reason: str, message: str) -> bool:
        """Report the operator as progressing but available, and not
        failing.
        """
        return self.apply_conditions(
            [
                Condition(AVAILABLE, CONDITION_TRUE),
                Condition(PROGRESSING, CONDITION_TRUE, reason, message),
                Condition(FAILING, CONDITION_FALSE),
            ]
        )

    def is_different_versions(
        self, desired_versions: Sequence[OperandVersion]
    ) -> bool:
        """Return `True` if the stored ``status.versions`` differ from the
        desired versions.
        """
        clusteroperator = self.store.get_or_create()
        current = (clusteroperator.get("status") or {}).get("versions") or []
        return versions_differ([v.to_dict() for v in desired_versions], current)

    def check_dependency(self) -> bool:
        """Return `True` if the dependency ClusterOperator is available and
        not failing.
        """
        return check_dependency(
            store=self.store, name=self.config.dependency_name
        )

    def poll_once(self) -> bool:
        """Check the dependency and versions once, and report the result.

        Errors from the checks are reported in the status message instead
        of being raised. Errors writing the status are raised.

        Returns
        -------
        done : `bool`
            `True` if the operator was reported as available.
        """
        config = self.config

        try:
            healthy = self.check_dependency()
        except Exception as e:
            self._logger.warning("Dependency check failed", error=str(e))
            self.fail(
                config.reason_missing_dependency,
                f"error checking {config.dependency_name} operator status "
                f"{e}",
            )
            return False

        if not healthy:
            self.fail(
                config.reason_missing_dependency,
                f"{config.dependency_name} operator not ready",
            )
            return False

        try:
            desired_versions = list(self._desired_versions())
            differs = self.is_different_versions(desired_versions)
        except Exception as e:
            self._logger.warning("Version check failed", error=str(e))
            self.fail(
                config.reason_empty,
                f"error checking {config.operator_name} version {e}",
            )
            return False

        if differs:
            self.progressing(
                config.reason_syncing,
                "Syncing to version "
                f"{format_operand_versions(desired_versions)}",
            )
            return False

        self.available(config.reason_empty, "")
        return True

    def report(
        self, stop_event: threading.Event | None = None
    ) -> PollOutcome:
        """Poll the dependency and versions, reporting the status, until the
        operator is available or ``stop_event`` is set.

        The first poll runs immediately. Later polls start
        ``config.interval`` seconds after the previous poll started.

        Parameters
        ----------
        stop_event : `threading.Event`, optional
            Set this event to stop polling.

        Returns
        -------
        outcome : `PollOutcome`
            `PollOutcome.SUCCESS` if the operator was reported as available,
            `PollOutcome.CANCELLED` if polling was stopped.
        """
        if stop_event is None:
            stop_event = threading.Event()

        self._logger.info(
            "Starting status reporting",
            dependency=self.config.dependency_name,
            interval=self.config.interval,
        )
        while True:
            if stop_event.is_set():
                self._logger.info("Status reporting cancelled")
                return PollOutcome.CANCELLED

            started = time.monotonic()
            if self.poll_once():
                self._logger.info("Operator is available")
                return PollOutcome.SUCCESS

            delay = started + self.config.interval - time.monotonic()
            if delay > 0:
                stop_event.wait(delay)


def _normalize_status(status: dict[str, Any]) -> dict[str, Any]:
    """Reduce a status to the fields this reporter writes, dropping empty
    values so that stored and candidate statuses compare equal.
    """
    return {
        "versions": _drop_empty(status.get("versions") or []),
        "relatedObjects": _drop_empty(status.get("relatedObjects") or []),
        "conditions": _drop_empty(status.get("conditions") or []),
    }


def _drop_empty(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [
        {key: value for key, value in item.items() if value not in (None, "")}
        for item in items
    ]
