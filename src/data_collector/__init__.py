"""Run-event reporter for configuration-management convergence runs."""

from .config import Settings, should_register_reporter
from .errors import DataCollectorError, TransportFault, classify_transport_error
from .models import ResourceReport, ResourceStatus, RunStatus
from .reporter import Reporter

__all__ = [
    "DataCollectorError",
    "Reporter",
    "ResourceReport",
    "ResourceStatus",
    "RunStatus",
    "Settings",
    "TransportFault",
    "classify_transport_error",
    "should_register_reporter",
]
