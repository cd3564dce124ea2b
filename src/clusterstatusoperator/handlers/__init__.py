"""Kopf handlers for the cluster-status-operator."""

__all__ = (
    "report_status_probe",
    "start_status_reporter",
    "stop_status_reporter",
)

from clusterstatusoperator.handlers.statusreport import (
    report_status_probe,
    start_status_reporter,
    stop_status_reporter,
)
