"""Builders for the documents posted to the collector."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from data_collector.config import Settings
from data_collector.models import ResourceReport, RunStatus

MESSAGE_VERSION = "1.0.0"


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _run_fields(run_status: RunStatus, config: Settings) -> dict[str, Any]:
    return {
        "id": run_status.run_id,
        "run_id": run_status.run_id,
        "message_version": MESSAGE_VERSION,
        "node_name": run_status.node_name,
        "entity_uuid": config.entity_uuid,
        "organization_name": config.organization,
        "source": config.app_name,
        "start_time": _isoformat(run_status.start_time),
    }


def run_start_document(run_status: RunStatus, config: Settings) -> dict[str, Any]:
    return {"message_type": "run_start", **_run_fields(run_status, config)}


def run_end_document(
    run_status: RunStatus,
    config: Settings,
    *,
    status: str,
    total_resource_count: int,
    updated_resources: Iterable[ResourceReport],
    expanded_run_list: Any = None,
    error_description: dict[str, Any] | None = None,
) -> dict[str, Any]:
    resources = [report.to_document() for report in updated_resources]
    document = {
        "message_type": "run_converge",
        **_run_fields(run_status, config),
        "end_time": _isoformat(run_status.end_time),
        "status": status,
        "total_resource_count": total_resource_count,
        "updated_resource_count": len(resources),
        "resources": resources,
        "run_list": expanded_run_list if expanded_run_list is not None else [],
    }
    if error_description is not None:
        document["error"] = error_description
    return document
