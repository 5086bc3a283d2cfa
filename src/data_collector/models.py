from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from data_collector.interfaces import ConvergedResource


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class RunStatus:
    node_name: str
    run_id: str = field(default_factory=lambda: uuid4().hex)
    start_time: datetime = field(default_factory=_utcnow)
    end_time: datetime | None = None
    exception: BaseException | None = None

    @property
    def failed(self) -> bool:
        return self.exception is not None

    @property
    def success(self) -> bool:
        return not self.failed

    def stop(self) -> None:
        if self.end_time is None:
            self.end_time = _utcnow()


class ResourceStatus(str, Enum):
    updated = "updated"
    failed = "failed"


@dataclass(slots=True)
class ResourceReport:
    """Observed outcome of converging one resource instance."""

    resource: ConvergedResource
    action: str
    current_resource: ConvergedResource | None = None
    exception: BaseException | None = None
    status: ResourceStatus = ResourceStatus.updated
    elapsed_time: float | None = None
    finished: bool = False

    @classmethod
    def for_current_resource(
        cls,
        resource: ConvergedResource,
        action: str,
        current_resource: ConvergedResource | None,
    ) -> ResourceReport:
        return cls(resource=resource, action=action, current_resource=current_resource)

    @classmethod
    def for_exception(cls, resource: ConvergedResource, action: str, exception: BaseException) -> ResourceReport:
        return cls(resource=resource, action=action, exception=exception, status=ResourceStatus.failed)

    def finish(self) -> None:
        """Capture the resource timing; the report is read-only afterwards."""
        if self.finished:
            return
        self.elapsed_time = getattr(self.resource, "elapsed_time", None)
        self.finished = True

    def to_document(self) -> dict[str, Any]:
        before = self.current_resource.state_for_reporter() if self.current_resource is not None else {}
        duration = "" if self.elapsed_time is None else str(round(self.elapsed_time * 1000))
        diff = getattr(self.resource, "diff", None)

        document: dict[str, Any] = {
            "type": self.resource.resource_type,
            "name": str(self.resource.name),
            "id": str(self.resource.identity),
            "after": self.resource.state_for_reporter(),
            "before": before,
            "duration": duration,
            "delta": diff if diff and self.status is ResourceStatus.updated else "",
            "result": str(self.action),
            "status": self.status.value,
        }

        cookbook_name = getattr(self.resource, "cookbook_name", None)
        if cookbook_name:
            document["cookbook_name"] = cookbook_name
            document["cookbook_version"] = getattr(self.resource, "cookbook_version", None) or ""
        if self.exception is not None:
            document["error_message"] = str(self.exception)
        return document
