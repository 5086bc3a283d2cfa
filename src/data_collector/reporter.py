"""Run-event reporter that streams convergence status to a data collector."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from data_collector.config import Settings
from data_collector.error_mapper import DefaultErrorMapper
from data_collector.errors import DataCollectorError, classify_transport_error
from data_collector.interfaces import (
    CollectorTransport,
    ConvergedResource,
    ErrorMapper,
    NestedResourceCheck,
    NeverNested,
)
from data_collector.models import ResourceReport, RunStatus
from data_collector.serializers import run_end_document, run_start_document

T = TypeVar("T")


class Reporter:
    """Observes one convergence run and reports its start and end to the collector.

    The run engine calls the event methods synchronously and in run order. A
    reporter instance belongs to exactly one run; build a new one per run.
    """

    def __init__(
        self,
        transport: CollectorTransport,
        config: Settings,
        *,
        nested_check: NestedResourceCheck | None = None,
        error_mapper: ErrorMapper | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._transport = transport
        self._config = config
        self._nested_check = nested_check or NeverNested()
        self._error_mapper = error_mapper or DefaultErrorMapper()
        self._logger = logger or logging.getLogger("data_collector.reporter")

        self.run_status: RunStatus | None = None
        self.updated_resources: list[ResourceReport] = []
        self.current_resource_report: ResourceReport | None = None
        self.expanded_run_list: Any = None
        self.error_description: dict[str, Any] | None = None
        self.total_resource_count = 0
        self.enabled = True

    # Run events

    def run_started(self, run_status: RunStatus) -> None:
        self.run_status = run_status
        self.send_to_collector(run_start_document(run_status, self._config))

    def run_completed(self, node: Any) -> None:
        self._send_run_completion(status="success", error_description=None)

    def run_failed(self, exception: BaseException) -> None:
        run_status = self._require_run_status()
        run_status.exception = exception
        self.error_description = self._error_mapper.run_failed(exception)
        self._send_run_completion(status="failure", error_description=self.error_description)

    def run_list_expanded(self, expanded_run_list: Any) -> None:
        self.expanded_run_list = expanded_run_list

    def run_list_expand_failed(self, node: Any, exception: BaseException) -> None:
        self.error_description = self._error_mapper.run_list_expand_failed(node, exception)

    def cookbook_resolution_failed(self, expanded_run_list: Any, exception: BaseException) -> None:
        self.error_description = self._error_mapper.cookbook_resolution_failed(expanded_run_list, exception)

    def cookbook_sync_failed(self, cookbooks: Any, exception: BaseException) -> None:
        self.error_description = self._error_mapper.cookbook_sync_failed(cookbooks, exception)

    # Resource events

    def resource_current_state_loaded(
        self,
        resource: ConvergedResource,
        action: str,
        current_resource: ConvergedResource | None,
    ) -> None:
        if self.nested_resource(resource):
            return
        self.current_resource_report = ResourceReport.for_current_resource(resource, action, current_resource)

    def resource_up_to_date(self, resource: ConvergedResource, action: str) -> None:
        self.total_resource_count += 1
        if self.nested_resource(resource):
            return
        self.current_resource_report = None

    def resource_skipped(self, resource: ConvergedResource, action: str, conditional: Any) -> None:
        self.total_resource_count += 1
        if self.nested_resource(resource):
            return
        self.current_resource_report = None

    def resource_updated(self, resource: ConvergedResource, action: str) -> None:
        self.total_resource_count += 1

    def resource_failed(self, resource: ConvergedResource, action: str, exception: BaseException) -> None:
        self.total_resource_count += 1
        self.error_description = self._error_mapper.resource_failed(resource, action, exception)
        if self.nested_resource(resource):
            return
        self.current_resource_report = ResourceReport.for_exception(resource, action, exception)

    def resource_completed(self, resource: ConvergedResource) -> None:
        report = self.current_resource_report
        if report is None or self.nested_resource(resource):
            return
        report.finish()
        self.updated_resources.append(report)
        self.current_resource_report = None

    def nested_resource(self, resource: ConvergedResource) -> bool:
        return self._nested_check.is_nested(resource)

    # Delivery

    def send_to_collector(self, document: dict[str, Any]) -> None:
        """Hand a document to the transport unless reporting has been switched off."""
        if not self.enabled:
            return
        self.disable_reporter_on_error(lambda: self._transport.send(document))

    def disable_reporter_on_error(self, operation: Callable[[], T]) -> T | None:
        """Run ``operation``; transient transport faults switch the reporter off.

        Faults outside the transport set always propagate. Transport faults
        propagate only when ``raise_on_failure`` is configured.
        """
        try:
            return operation()
        except Exception as exc:
            fault = classify_transport_error(exc)
            if fault is None:
                raise

            self.disable()
            context = {
                "fault": fault.value,
                "server_url": self._config.server_url,
                "error": f"{type(exc).__name__}: {exc}",
            }
            if self._config.raise_on_failure:
                self._logger.error("collector_send_failed", extra=context)
                raise
            self._logger.warning("collector_send_failed", extra=context)
            return None

    def disable(self) -> None:
        self.enabled = False

    def _require_run_status(self) -> RunStatus:
        if self.run_status is None:
            raise DataCollectorError("Run end reported before run_started")
        return self.run_status

    def _send_run_completion(self, *, status: str, error_description: dict[str, Any] | None) -> None:
        run_status = self._require_run_status()
        run_status.stop()
        self.send_to_collector(
            run_end_document(
                run_status,
                self._config,
                status=status,
                total_resource_count=self.total_resource_count,
                updated_resources=self.updated_resources,
                expanded_run_list=self.expanded_run_list,
                error_description=error_description,
            )
        )
