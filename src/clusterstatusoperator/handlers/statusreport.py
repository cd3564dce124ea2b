"""Kopf handlers that run the status reporter alongside the operator."""

__all__ = (
    "report_status_probe",
    "start_status_reporter",
    "stop_status_reporter",
)

from typing import Any

import kopf

from clusterstatusoperator.config import ConfigurationError
from clusterstatusoperator.startup import start_reporter


@kopf.on.startup()
def start_status_reporter(
    *, memo: kopf.Memo, logger: Any, **kwargs: Any
) -> None:
    """Start reporting the operator status in the background.

    Parameters
    ----------
    memo : `kopf.Memo`
        Operator-wide memo; the running reporter is stored as
        ``memo.status_reporter``.
    logger : `Any`
        The kopf logger.
    kwargs : `Any`
        Additional keyword arguments provided by kopf.
    """
    try:
        memo.status_reporter = start_reporter(logger=logger)
    except ConfigurationError as e:
        raise kopf.PermanentError(f"Invalid configuration: {e}") from e
    except Exception as e:
        raise kopf.PermanentError(
            f"Could not create the status reporter: {e}"
        ) from e


@kopf.on.cleanup()
def stop_status_reporter(
    *, memo: kopf.Memo, logger: Any, **kwargs: Any
) -> None:
    """Stop the background status reporter."""
    runner = memo.get("status_reporter")
    if runner is None:
        return
    runner.stop(timeout=10)
    logger.info(f"Status reporter stopped in state {runner.state}")


@kopf.on.probe(id="status")
def report_status_probe(*, memo: kopf.Memo, **kwargs: Any) -> str:
    """Report the state of the status reporter for liveness probes."""
    runner = memo.get("status_reporter")
    if runner is None:
        return "stopped"
    return runner.state
