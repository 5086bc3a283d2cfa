"""Default mapping of run and resource failures to error description documents."""

from __future__ import annotations

from typing import Any

from data_collector.interfaces import ConvergedResource, ErrorMapper


def _exception_section(exception: BaseException) -> dict[str, str]:
    return {"class": type(exception).__name__, "message": str(exception)}


def _names(items: Any) -> list[str]:
    if isinstance(items, dict):
        return sorted(str(key) for key in items)
    if isinstance(items, (list, tuple, set)):
        return [str(item) for item in items]
    return [str(items)]


class DefaultErrorMapper(ErrorMapper):
    """Builds plain-dict error descriptions suitable for the run end document."""

    def resource_failed(self, resource: ConvergedResource, action: str, exception: BaseException) -> dict[str, Any]:
        return {
            "title": f"Error executing action `{action}` on resource '{resource.resource_type}[{resource.name}]'",
            "exception": _exception_section(exception),
            "context": {
                "resource_type": resource.resource_type,
                "resource_name": str(resource.name),
                "resource_id": str(resource.identity),
                "action": str(action),
            },
        }

    def run_list_expand_failed(self, node: Any, exception: BaseException) -> dict[str, Any]:
        return {
            "title": "Error expanding the run_list",
            "exception": _exception_section(exception),
            "context": {"node": str(getattr(node, "name", node))},
        }

    def cookbook_resolution_failed(self, expanded_run_list: Any, exception: BaseException) -> dict[str, Any]:
        return {
            "title": "Error resolving cookbooks for run list",
            "exception": _exception_section(exception),
            "context": {"expanded_run_list": _names(expanded_run_list)},
        }

    def cookbook_sync_failed(self, cookbooks: Any, exception: BaseException) -> dict[str, Any]:
        return {
            "title": "Error syncing cookbooks",
            "exception": _exception_section(exception),
            "context": {"cookbooks": _names(cookbooks)},
        }

    def run_failed(self, exception: BaseException) -> dict[str, Any]:
        return {
            "title": "Run failed",
            "exception": _exception_section(exception),
            "context": {},
        }
