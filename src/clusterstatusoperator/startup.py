"""Code intended to run on start-up, before running any handlers."""

from __future__ import annotations

__all__ = ("ReporterRunner", "create_reporter", "start_reporter")

import threading
from typing import Any

import structlog

from clusterstatusoperator.config import ReporterConfig
from clusterstatusoperator.k8s import create_k8sclient
from clusterstatusoperator.reporter import PollOutcome, StatusReporter
from clusterstatusoperator.store import ClusterOperatorStore


def create_reporter(
    config: ReporterConfig | None = None, k8s_client: Any | None = None
) -> StatusReporter:
    """Create a status reporter for the operator.

    Parameters
    ----------
    config : `clusterstatusoperator.config.ReporterConfig`, optional
        The configuration. Defaults to one read from the environment.
    k8s_client, optional
        A Kubernetes client. Defaults to
        `clusterstatusoperator.k8s.create_k8sclient`.
    """
    if config is None:
        config = ReporterConfig.from_env()
    if k8s_client is None:
        k8s_client = create_k8sclient()
    store = ClusterOperatorStore(
        name=config.operator_name, k8s_client=k8s_client
    )
    return StatusReporter(store=store, config=config)


class ReporterRunner:
    """Run `StatusReporter.report` on a daemon thread."""

    def __init__(self, reporter: StatusReporter, logger: Any = None) -> None:
        self.reporter = reporter
        self.stop_event = threading.Event()
        self.outcome: PollOutcome | None = None
        self.error: BaseException | None = None
        self._logger = logger or structlog.get_logger(__name__)
        self._thread = threading.Thread(
            target=self._run, name="status-reporter", daemon=True
        )

    def _run(self) -> None:
        try:
            self.outcome = self.reporter.report(self.stop_event)
        except Exception as e:
            self.error = e
            self._logger.exception("Status reporting stopped with an error")

    def start(self) -> None:
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Signal the reporter to stop and wait for the thread to finish."""
        self.stop_event.set()
        if self._thread.is_alive():
            self._thread.join(timeout)

    @property
    def state(self) -> str:
        """One of ``polling``, ``success``, ``cancelled``, or ``error``."""
        if self.error is not None:
            return "error"
        if self.outcome is not None:
            return self.outcome.value
        return "polling"


def start_reporter(logger: Any = None) -> ReporterRunner:
    """Create the status reporter from the environment and start it."""
    if logger is None:
        logger = structlog.get_logger(__name__)

    runner = ReporterRunner(create_reporter(), logger=logger)
    runner.start()
    logger.info("Started status reporter")
    return runner
