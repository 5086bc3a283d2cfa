"""HTTP delivery of run documents to a collector endpoint."""

from __future__ import annotations

import logging
from typing import Any

import requests

from data_collector.interfaces import CollectorTransport

LOGGER = logging.getLogger(__name__)


class HttpCollectorTransport(CollectorTransport):
    """POSTs each document as JSON; any failure is raised to the caller."""

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 30.0,
        user_agent: str = "data-collector",
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout_seconds
        self._session = session or requests.Session()
        self._headers = {"Content-Type": "application/json", "User-Agent": user_agent}

    def send(self, document: dict[str, Any]) -> None:
        response = self._session.post(self.url, json=document, headers=self._headers, timeout=self.timeout)
        response.raise_for_status()
        LOGGER.debug(
            "collector_document_sent",
            extra={"message_type": document.get("message_type"), "status_code": response.status_code},
        )
