"""Collector transport adapters (HTTP delivery and in-memory recording)."""

from .http_collector import HttpCollectorTransport
from .recording import RecordingTransport

__all__ = [
    "HttpCollectorTransport",
    "RecordingTransport",
]
