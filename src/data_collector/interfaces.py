"""Contracts for the collaborators a reporter observes and talks to."""

from __future__ import annotations

from typing import Any, Protocol


class ConvergedResource(Protocol):
    """A resource instance handed over by the run engine."""

    resource_type: str
    name: str
    identity: str
    elapsed_time: float | None

    def state_for_reporter(self) -> dict[str, Any]:
        """Return the reportable state attributes of the resource."""


class NestedResourceCheck(Protocol):
    """Tells whether a resource runs inside another resource's action."""

    def is_nested(self, resource: ConvergedResource) -> bool:
        """Return ``True`` for resources converged from within another resource."""


class NeverNested:
    """Nested check for run engines that do not nest resources."""

    def is_nested(self, resource: ConvergedResource) -> bool:
        return False


class ErrorMapper(Protocol):
    """Turns a raised exception plus its context into an error description document."""

    def resource_failed(self, resource: ConvergedResource, action: str, exception: BaseException) -> dict[str, Any]:
        """Describe a resource whose action raised."""

    def run_list_expand_failed(self, node: Any, exception: BaseException) -> dict[str, Any]:
        """Describe a failure to expand the node's run list."""

    def cookbook_resolution_failed(self, expanded_run_list: Any, exception: BaseException) -> dict[str, Any]:
        """Describe a failure to resolve cookbooks for the expanded run list."""

    def cookbook_sync_failed(self, cookbooks: Any, exception: BaseException) -> dict[str, Any]:
        """Describe a failure to synchronize cookbooks."""

    def run_failed(self, exception: BaseException) -> dict[str, Any]:
        """Describe the exception that ended the run."""


class CollectorTransport(Protocol):
    """Delivers a JSON-serializable document to the collector."""

    def send(self, document: dict[str, Any]) -> None:
        """POST the document, raising on any delivery failure."""
