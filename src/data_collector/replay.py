"""Drive a reporter from a JSON-lines log of recorded run events."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from data_collector.models import RunStatus
from data_collector.reporter import Reporter


class RecordedRunError(RuntimeError):
    """Stand-in for an exception captured in an event log."""

    def __init__(self, class_name: str, message: str) -> None:
        super().__init__(message)
        self.class_name = class_name


@dataclass(slots=True)
class RecordedResource:
    resource_type: str
    name: str
    identity: str
    nested: bool = False
    elapsed_time: float | None = None
    state: dict[str, Any] = field(default_factory=dict)
    cookbook_name: str | None = None
    cookbook_version: str | None = None

    def state_for_reporter(self) -> dict[str, Any]:
        return dict(self.state)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> RecordedResource:
        if not isinstance(payload, dict):
            raise ValueError(f"resource must be a JSON object, got {type(payload).__name__}")
        name = str(payload["name"])
        return cls(
            resource_type=str(payload["type"]),
            name=name,
            identity=str(payload.get("identity", name)),
            nested=bool(payload.get("nested", False)),
            elapsed_time=payload.get("elapsed_time"),
            state=dict(payload.get("state") or {}),
            cookbook_name=payload.get("cookbook_name"),
            cookbook_version=payload.get("cookbook_version"),
        )


class RecordedNesting:
    """Nested check that trusts the ``nested`` flag recorded with each resource."""

    def is_nested(self, resource: Any) -> bool:
        return bool(getattr(resource, "nested", False))


def _exception(payload: dict[str, Any]) -> RecordedRunError:
    error = payload.get("exception") or {}
    if not isinstance(error, dict):
        raise ValueError(f"exception must be a JSON object, got {type(error).__name__}")
    return RecordedRunError(str(error.get("class", "RuntimeError")), str(error.get("message", "")))


def _resource(payload: dict[str, Any]) -> RecordedResource:
    return RecordedResource.from_payload(payload["resource"])


def dispatch_event(reporter: Reporter, payload: dict[str, Any]) -> None:
    """Call the reporter handler named by ``payload["event"]``."""
    if not isinstance(payload, dict):
        raise ValueError(f"event must be a JSON object, got {type(payload).__name__}")
    event = payload.get("event")
    if event == "run_started":
        reporter.run_started(RunStatus(node_name=str(payload.get("node_name", "localhost"))))
    elif event == "run_completed":
        reporter.run_completed(payload.get("node_name"))
    elif event == "run_failed":
        reporter.run_failed(_exception(payload))
    elif event == "run_list_expanded":
        reporter.run_list_expanded(payload.get("run_list", []))
    elif event == "run_list_expand_failed":
        reporter.run_list_expand_failed(payload.get("node_name"), _exception(payload))
    elif event == "cookbook_resolution_failed":
        reporter.cookbook_resolution_failed(payload.get("run_list", reporter.expanded_run_list), _exception(payload))
    elif event == "cookbook_sync_failed":
        reporter.cookbook_sync_failed(payload.get("cookbooks", []), _exception(payload))
    elif event == "resource_current_state_loaded":
        current = payload.get("current_resource")
        reporter.resource_current_state_loaded(
            _resource(payload),
            payload["action"],
            RecordedResource.from_payload(current) if current else None,
        )
    elif event == "resource_up_to_date":
        reporter.resource_up_to_date(_resource(payload), payload["action"])
    elif event == "resource_skipped":
        reporter.resource_skipped(_resource(payload), payload["action"], payload.get("conditional"))
    elif event == "resource_updated":
        reporter.resource_updated(_resource(payload), payload["action"])
    elif event == "resource_failed":
        reporter.resource_failed(_resource(payload), payload["action"], _exception(payload))
    elif event == "resource_completed":
        reporter.resource_completed(_resource(payload))
    else:
        raise ValueError(f"Unknown run event: {event!r}")


def replay_lines(reporter: Reporter, lines: Iterable[str]) -> int:
    """Replay JSON-lines events in order and return how many were dispatched."""
    count = 0
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            payload = json.loads(line)
            dispatch_event(reporter, payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid event on line {line_number}: {exc}") from exc
        count += 1
    return count


def replay_file(reporter: Reporter, path: str | Path) -> int:
    with Path(path).open("r", encoding="utf-8") as handle:
        return replay_lines(reporter, handle)
