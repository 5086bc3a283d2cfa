"""Exception types and transport-fault classification."""

from __future__ import annotations

import errno
import http.client
from enum import Enum

import requests
import urllib3


class DataCollectorError(RuntimeError):
    """Raised when the reporter is driven outside its supported event order."""


class TransportFault(str, Enum):
    """Transient transport faults that switch the reporter off for the run."""

    CONNECTION_TIMEOUT = "connection_timeout"
    CONNECTION_RESET = "connection_reset"
    CONNECTION_REFUSED = "connection_refused"
    INVALID_ARGUMENT = "invalid_argument"
    END_OF_STREAM = "end_of_stream"
    BAD_RESPONSE = "bad_response"
    HEADER_SYNTAX = "header_syntax"
    PROTOCOL_ERROR = "protocol_error"


# Checked in order, so subclasses come before their bases.
_FAULT_TABLE: tuple[tuple[type[BaseException], TransportFault], ...] = (
    (requests.exceptions.Timeout, TransportFault.CONNECTION_TIMEOUT),
    (TimeoutError, TransportFault.CONNECTION_TIMEOUT),
    (ConnectionResetError, TransportFault.CONNECTION_RESET),
    (ConnectionRefusedError, TransportFault.CONNECTION_REFUSED),
    (http.client.IncompleteRead, TransportFault.END_OF_STREAM),
    (requests.exceptions.ChunkedEncodingError, TransportFault.END_OF_STREAM),
    (EOFError, TransportFault.END_OF_STREAM),
    (http.client.BadStatusLine, TransportFault.BAD_RESPONSE),
    (http.client.LineTooLong, TransportFault.HEADER_SYNTAX),
    (http.client.HTTPException, TransportFault.PROTOCOL_ERROR),
)

# Matched only when nothing more specific is wrapped inside.
_GENERIC_FAULTS: tuple[type[BaseException], ...] = (urllib3.exceptions.ProtocolError,)

_MAX_CHAIN_DEPTH = 8


def _classify_one(exc: BaseException) -> TransportFault | None:
    for exc_type, fault in _FAULT_TABLE:
        if isinstance(exc, exc_type):
            return fault
    if isinstance(exc, OSError) and exc.errno == errno.EINVAL:
        return TransportFault.INVALID_ARGUMENT
    return None


def _wrapped(exc: BaseException) -> list[BaseException]:
    inner = [exc.__cause__, getattr(exc, "reason", None)]
    inner.extend(arg for arg in exc.args if isinstance(arg, BaseException))
    return [candidate for candidate in inner if isinstance(candidate, BaseException)]


def classify_transport_error(exc: BaseException) -> TransportFault | None:
    """Map an exception raised while sending to a transport fault, or ``None``.

    ``requests`` wraps socket errors (``ConnectionError(ProtocolError(...,
    ConnectionResetError(...)))``), so wrapped exceptions are searched
    breadth-first when the outer exception is not itself in the table. TLS and
    name-resolution failures match nothing and stay unclassified.
    """
    pending = [exc]
    seen: set[int] = set()
    generic = False
    depth = 0
    while pending and depth < _MAX_CHAIN_DEPTH:
        next_round: list[BaseException] = []
        for candidate in pending:
            if id(candidate) in seen:
                continue
            seen.add(id(candidate))
            fault = _classify_one(candidate)
            if fault is not None:
                return fault
            generic = generic or isinstance(candidate, _GENERIC_FAULTS)
            next_round.extend(_wrapped(candidate))
        pending = next_round
        depth += 1

    return TransportFault.PROTOCOL_ERROR if generic else None
