"""Configuration for the status reporter, read from the environment."""

from __future__ import annotations

__all__ = (
    "API_GROUP",
    "API_PLURAL",
    "API_VERSION",
    "ConfigurationError",
    "ReporterConfig",
)

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from clusterstatusoperator.version import get_version

API_GROUP = "config.openshift.io"
"""API group of the ClusterOperator resource."""

API_VERSION = "v1"
"""API version of the ClusterOperator resource."""

API_PLURAL = "clusteroperators"
"""Plural name of the ClusterOperator resource."""


class ConfigurationError(Exception):
    """Raised when the environment holds an unusable configuration value."""


@dataclass(frozen=True)
class ReporterConfig:
    """Names, reasons, and timing used by a
    `~clusterstatusoperator.reporter.StatusReporter`.
    """

    operator_name: str = "cluster-autoscaler"
    """Name of the ClusterOperator resource this operator reports to."""

    dependency_name: str = "machine-api"
    """Name of the upstream ClusterOperator whose health is checked."""

    operand_name: str = "operator"
    """Name of the operand version entry that this operator reports."""

    operand_version: str = field(default_factory=get_version)
    """Version of the operand that this operator reports."""

    namespace: str = "openshift-machine-api"
    """Namespace in which the operator runs."""

    interval: float = 15.0
    """Seconds between the start of consecutive poll ticks."""

    reason_missing_dependency: str = "MissingDependency"
    """Reason used when the upstream dependency is unavailable."""

    reason_syncing: str = "SyncingResources"
    """Reason used while versions are being synchronized."""

    reason_empty: str = ""
    """Reason used for the Available state and self-check failures."""

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None
    ) -> ReporterConfig:
        """Create a configuration from ``CSO_``-prefixed environment
        variables.

        Parameters
        ----------
        environ : `dict`, optional
            Mapping of environment variables. Defaults to `os.environ`.

        Returns
        -------
        config : `ReporterConfig`
            The configuration, with defaults for any unset variable.

        Raises
        ------
        ConfigurationError
            Raised if ``CSO_POLL_INTERVAL`` is not a positive number.
        """
        if environ is None:
            environ = os.environ

        kwargs: dict[str, Any] = {}
        for variable, name in (
            ("CSO_OPERATOR_NAME", "operator_name"),
            ("CSO_DEPENDENCY_NAME", "dependency_name"),
            ("CSO_OPERAND_NAME", "operand_name"),
            ("CSO_OPERAND_VERSION", "operand_version"),
            ("CSO_NAMESPACE", "namespace"),
        ):
            value = environ.get(variable)
            if value:
                kwargs[name] = value

        raw_interval = environ.get("CSO_POLL_INTERVAL")
        if raw_interval:
            try:
                interval = float(raw_interval)
            except ValueError as e:
                raise ConfigurationError(
                    f"CSO_POLL_INTERVAL must be a number, got {raw_interval!r}"
                ) from e
            if interval <= 0:
                raise ConfigurationError(
                    f"CSO_POLL_INTERVAL must be positive, got {interval}"
                )
            kwargs["interval"] = interval

        return cls(**kwargs)

    @property
    def related_objects(self) -> list[dict[str, str]]:
        """Default references to the resources owned by this operator."""
        return [
            {"group": "", "resource": "namespaces", "name": self.namespace},
            {
                "group": API_GROUP,
                "resource": API_PLURAL,
                "name": self.operator_name,
            },
        ]
