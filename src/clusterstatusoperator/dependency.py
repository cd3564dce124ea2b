"""Health check of the upstream ClusterOperator dependency."""

__all__ = ("check_dependency",)

import structlog

from clusterstatusoperator.conditions import (
    AVAILABLE,
    FAILING,
    is_condition_false,
    is_condition_true,
)
from clusterstatusoperator.store import ClusterOperatorStore

logger = structlog.get_logger(__name__)


def check_dependency(*, store: ClusterOperatorStore, name: str) -> bool:
    """Check whether a dependency ClusterOperator is ready.

    Parameters
    ----------
    store : `clusterstatusoperator.store.ClusterOperatorStore`
        Store used to read the dependency's ClusterOperator.
    name : `str`
        Name of the dependency's ClusterOperator.

    Returns
    -------
    healthy : `bool`
        `True` if the dependency is available and not failing.

    Raises
    ------
    kubernetes.client.exceptions.ApiException
        Raised if the dependency's ClusterOperator can't be read, including
        when it does not exist.
    """
    try:
        clusteroperator = store.get(name)
    except Exception as e:
        logger.error(f"Failed to get dependency {name} status: {e}")
        raise

    conditions = (clusteroperator.get("status") or {}).get("conditions") or []
    if is_condition_true(conditions, AVAILABLE) and is_condition_false(
        conditions, FAILING
    ):
        return True

    logger.info(f"{name} operator not ready yet")
    return False
