"""Tests for the clusterstatusoperator.store module."""

import pytest
from kubernetes.client.exceptions import ApiException

from clusterstatusoperator.store import ClusterOperatorStore


def test_get_or_create_creates_missing(
    store: ClusterOperatorStore, custom_objects_api
) -> None:
    clusteroperator = store.get_or_create()
    assert clusteroperator["metadata"]["name"] == "cluster-autoscaler"
    assert clusteroperator["kind"] == "ClusterOperator"
    assert custom_objects_api.create_calls == 1

    # The second call finds the created resource
    store.get_or_create()
    assert custom_objects_api.create_calls == 1


def test_get_or_create_returns_existing(
    store: ClusterOperatorStore, custom_objects_api
) -> None:
    custom_objects_api.objects["cluster-autoscaler"] = {
        "metadata": {"name": "cluster-autoscaler"},
        "status": {"versions": [{"name": "operator", "version": "1"}]},
    }
    clusteroperator = store.get_or_create()
    assert clusteroperator["status"]["versions"][0]["version"] == "1"
    assert custom_objects_api.create_calls == 0


def test_get_or_create_raises_other_errors(
    store: ClusterOperatorStore, custom_objects_api
) -> None:
    custom_objects_api.get_errors["cluster-autoscaler"] = ApiException(
        status=403, reason="Forbidden"
    )
    with pytest.raises(ApiException) as excinfo:
        store.get_or_create()
    assert excinfo.value.status == 403
    assert custom_objects_api.create_calls == 0


def test_get_missing_raises(store: ClusterOperatorStore) -> None:
    with pytest.raises(ApiException) as excinfo:
        store.get("machine-api")
    assert excinfo.value.status == 404


def test_update_status(store: ClusterOperatorStore, custom_objects_api) -> None:
    clusteroperator = store.get_or_create()
    clusteroperator["status"] = {"conditions": []}
    store.update_status(clusteroperator)
    assert custom_objects_api.status_updates == [{"conditions": []}]
    assert custom_objects_api.objects["cluster-autoscaler"]["status"] == {
        "conditions": []
    }


def test_get_or_create_raises_create_errors(
    store: ClusterOperatorStore, custom_objects_api
) -> None:
    custom_objects_api.create_error = ApiException(
        status=409, reason="Conflict"
    )
    with pytest.raises(ApiException) as excinfo:
        store.get_or_create()
    assert excinfo.value.status == 409
    assert custom_objects_api.create_calls == 1
    assert "cluster-autoscaler" not in custom_objects_api.objects
