"""Access to ClusterOperator status records."""

__all__ = ("ClusterOperatorStore",)

from typing import Any

import structlog
from kubernetes.client.exceptions import ApiException

from clusterstatusoperator.k8s import (
    create_clusteroperator,
    get_clusteroperator,
    replace_clusteroperator_status,
)


class ClusterOperatorStore:
    """Read and write ClusterOperator resources for one operator.

    Parameters
    ----------
    name : `str`
        Name of the ClusterOperator owned by this operator.
    k8s_client
        A Kubernetes client (see
        `clusterstatusoperator.k8s.create_k8sclient`).
    """

    def __init__(self, *, name: str, k8s_client: Any) -> None:
        self.name = name
        self._k8s_client = k8s_client
        self._logger = structlog.get_logger(__name__)

    def get(self, name: str) -> dict[str, Any]:
        """Get any ClusterOperator by name.

        Errors, including a missing resource, are raised as
        `~kubernetes.client.exceptions.ApiException`.
        """
        return get_clusteroperator(name=name, k8s_client=self._k8s_client)

    def get_or_create(self) -> dict[str, Any]:
        """Get this operator's ClusterOperator, creating an empty one if it
        does not exist yet.
        """
        try:
            return self.get(self.name)
        except ApiException as e:
            if e.status != 404:
                raise
        self._logger.info(f"Creating ClusterOperator {self.name}")
        return create_clusteroperator(
            name=self.name, k8s_client=self._k8s_client
        )

    def update_status(self, record: dict[str, Any]) -> dict[str, Any]:
        """Overwrite the status of a ClusterOperator with ``record["status"]``."""
        return replace_clusteroperator_status(
            body=record, k8s_client=self._k8s_client
        )
