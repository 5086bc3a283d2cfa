"""In-memory transport used for dry runs and local inspection."""

from __future__ import annotations

from typing import Any

from data_collector.interfaces import CollectorTransport


class RecordingTransport(CollectorTransport):
    """Keeps every document it is asked to send, in send order."""

    def __init__(self) -> None:
        self.documents: list[dict[str, Any]] = []

    def send(self, document: dict[str, Any]) -> None:
        self.documents.append(document)
