"""Helpers for interacting with Kubernetes APIs."""

__all__ = (
    "create_clusteroperator",
    "create_k8sclient",
    "get_clusteroperator",
    "replace_clusteroperator_status",
)

from typing import Any

import kubernetes

from clusterstatusoperator.config import API_GROUP, API_PLURAL, API_VERSION


def create_k8sclient() -> kubernetes.client:
    """Get a Kubernetes client configured with available cluster
    authentication.

    If in-cluster authentication is available, that is used. Otherwise
    this function falls-back to using a kubectl config file, which is
    appropriate for development.
    """
    try:
        kubernetes.config.load_incluster_config()
    except kubernetes.config.ConfigException:
        kubernetes.config.load_kube_config()
    return kubernetes.client


def get_clusteroperator(*, name: str, k8s_client: Any) -> dict[str, Any]:
    """Get a ClusterOperator resource.

    Parameters
    ----------
    name : `str`
        The name of the ClusterOperator.
    k8s_client
        A Kubernetes client (see `create_k8sclient`).

    Returns
    -------
    clusteroperator : `dict`
        The raw ClusterOperator manifest.

    Raises
    ------
    kubernetes.client.exceptions.ApiException
        Raised if the resource can't be read, including when it does not
        exist (``status == 404``).
    """
    api = k8s_client.CustomObjectsApi()
    return api.get_cluster_custom_object(
        group=API_GROUP,
        version=API_VERSION,
        plural=API_PLURAL,
        name=name,
    )


def create_clusteroperator(*, name: str, k8s_client: Any) -> dict[str, Any]:
    """Create an empty ClusterOperator resource.

    Parameters
    ----------
    name : `str`
        The name of the ClusterOperator.
    k8s_client
        A Kubernetes client (see `create_k8sclient`).

    Returns
    -------
    clusteroperator : `dict`
        The ClusterOperator manifest, as stored by the API server.
    """
    body = {
        "apiVersion": f"{API_GROUP}/{API_VERSION}",
        "kind": "ClusterOperator",
        "metadata": {"name": name},
    }
    api = k8s_client.CustomObjectsApi()
    return api.create_cluster_custom_object(
        group=API_GROUP,
        version=API_VERSION,
        plural=API_PLURAL,
        body=body,
    )


def replace_clusteroperator_status(
    *, body: dict[str, Any], k8s_client: Any
) -> dict[str, Any]:
    """Overwrite the ``status`` subresource of a ClusterOperator.

    Parameters
    ----------
    body : `dict`
        The full ClusterOperator manifest, including ``metadata.name`` and
        the new ``status``.
    k8s_client
        A Kubernetes client (see `create_k8sclient`).

    Returns
    -------
    clusteroperator : `dict`
        The updated ClusterOperator manifest.
    """
    api = k8s_client.CustomObjectsApi()
    return api.replace_cluster_custom_object_status(
        group=API_GROUP,
        version=API_VERSION,
        plural=API_PLURAL,
        name=body["metadata"]["name"],
        body=body,
    )
