"""Shared fixtures: an in-memory stand-in for the Kubernetes
CustomObjectsApi.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest
from kubernetes.client.exceptions import ApiException

from clusterstatusoperator.config import ReporterConfig
from clusterstatusoperator.store import ClusterOperatorStore


class FakeCustomObjectsApi:
    """Cluster-scoped custom objects kept in a dict, keyed by name."""

    def __init__(self) -> None:
        self.objects: dict[str, dict[str, Any]] = {}
        self.get_errors: dict[str, ApiException] = {}
        self.create_error: ApiException | None = None
        self.status_error: ApiException | None = None
        self.create_calls = 0
        self.status_updates: list[dict[str, Any]] = []

    def get_cluster_custom_object(
        self, *, group: str, version: str, plural: str, name: str
    ) -> dict[str, Any]:
        if name in self.get_errors:
            raise self.get_errors[name]
        if name not in self.objects:
            raise ApiException(status=404, reason="Not Found")
        return copy.deepcopy(self.objects[name])

    def create_cluster_custom_object(
        self, *, group: str, version: str, plural: str, body: dict[str, Any]
    ) -> dict[str, Any]:
        self.create_calls += 1
        if self.create_error is not None:
            raise self.create_error
        name = body["metadata"]["name"]
        self.objects[name] = copy.deepcopy(body)
        return copy.deepcopy(body)

    def replace_cluster_custom_object_status(
        self,
        *,
        group: str,
        version: str,
        plural: str,
        name: str,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        if self.status_error is not None:
            raise self.status_error
        self.status_updates.append(copy.deepcopy(body["status"]))
        stored = self.objects.setdefault(name, {"metadata": {"name": name}})
        stored["status"] = copy.deepcopy(body["status"])
        return copy.deepcopy(stored)


class FakeK8sClient:
    """Mimics the ``kubernetes.client`` module for a single shared API."""

    def __init__(self, api: FakeCustomObjectsApi) -> None:
        self._api = api

    def CustomObjectsApi(self) -> FakeCustomObjectsApi:  # noqa: N802
        return self._api


@pytest.fixture
def custom_objects_api() -> FakeCustomObjectsApi:
    return FakeCustomObjectsApi()


@pytest.fixture
def k8s_client(custom_objects_api: FakeCustomObjectsApi) -> FakeK8sClient:
    return FakeK8sClient(custom_objects_api)


@pytest.fixture
def config() -> ReporterConfig:
    return ReporterConfig(
        operator_name="cluster-autoscaler",
        dependency_name="machine-api",
        operand_name="operator",
        operand_version="4.1.0",
        namespace="openshift-machine-api",
        interval=0.01,
    )


@pytest.fixture
def store(
    config: ReporterConfig, k8s_client: FakeK8sClient
) -> ClusterOperatorStore:
    return ClusterOperatorStore(
        name=config.operator_name, k8s_client=k8s_client
    )
