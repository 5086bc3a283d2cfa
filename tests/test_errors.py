from __future__ import annotations

import errno
import http.client
import socket
import ssl

import pytest
import requests
import urllib3

from data_collector.errors import TransportFault, classify_transport_error


@pytest.mark.parametrize(
    ("error", "fault"),
    [
        (TimeoutError("timed out"), TransportFault.CONNECTION_TIMEOUT),
        (requests.exceptions.ReadTimeout("read timed out"), TransportFault.CONNECTION_TIMEOUT),
        (ConnectionResetError("reset"), TransportFault.CONNECTION_RESET),
        (http.client.RemoteDisconnected("closed"), TransportFault.CONNECTION_RESET),
        (ConnectionRefusedError("refused"), TransportFault.CONNECTION_REFUSED),
        (OSError(errno.EINVAL, "Invalid argument"), TransportFault.INVALID_ARGUMENT),
        (EOFError("eof"), TransportFault.END_OF_STREAM),
        (http.client.IncompleteRead(b"partial"), TransportFault.END_OF_STREAM),
        (requests.exceptions.ChunkedEncodingError("truncated"), TransportFault.END_OF_STREAM),
        (http.client.BadStatusLine("HTTP/9"), TransportFault.BAD_RESPONSE),
        (http.client.LineTooLong("header line"), TransportFault.HEADER_SYNTAX),
        (http.client.HTTPException("protocol"), TransportFault.PROTOCOL_ERROR),
    ],
)
def test_direct_transport_faults(error: BaseException, fault: TransportFault) -> None:
    assert classify_transport_error(error) is fault


def test_wrapped_reset_is_found_inside_requests_connection_error() -> None:
    inner = ConnectionResetError(104, "Connection reset by peer")
    error = requests.exceptions.ConnectionError(inner)

    assert classify_transport_error(error) is TransportFault.CONNECTION_RESET


def test_explicit_cause_is_followed() -> None:
    try:
        try:
            raise ConnectionRefusedError("refused")
        except ConnectionRefusedError as exc:
            raise RuntimeError("send failed") from exc
    except RuntimeError as outer:
        error = outer

    assert classify_transport_error(error) is TransportFault.CONNECTION_REFUSED


def test_unrelated_exception_raised_while_handling_fault_is_unclassified() -> None:
    try:
        try:
            raise ConnectionResetError("reset")
        except ConnectionResetError:
            raise KeyError("message_type")
    except KeyError as outer:
        error = outer

    assert classify_transport_error(error) is None


def _connection_error(cause: OSError) -> requests.exceptions.ConnectionError:
    try:
        raise cause
    except OSError as exc:
        try:
            raise urllib3.exceptions.NewConnectionError(None, f"Failed to establish a new connection: {exc}") from exc
        except urllib3.exceptions.NewConnectionError as new_connection:
            retries = urllib3.exceptions.MaxRetryError(None, "/", new_connection)
    return requests.exceptions.ConnectionError(retries)


def test_refused_connection_is_found_through_urllib3_wrappers() -> None:
    error = _connection_error(ConnectionRefusedError(111, "Connection refused"))

    assert classify_transport_error(error) is TransportFault.CONNECTION_REFUSED


def test_name_resolution_failure_is_unclassified() -> None:
    error = _connection_error(socket.gaierror(socket.EAI_NONAME, "Name or service not known"))

    assert classify_transport_error(error) is None


def test_tls_failures_are_unclassified() -> None:
    verify_failed = ssl.SSLCertVerificationError(1, "certificate verify failed")

    assert classify_transport_error(requests.exceptions.SSLError(verify_failed)) is None
    assert classify_transport_error(requests.exceptions.ConnectionError("no route")) is None


def test_urllib3_protocol_error_prefers_wrapped_socket_error() -> None:
    aborted = urllib3.exceptions.ProtocolError("Connection aborted.", ConnectionResetError(104, "reset"))
    garbled = urllib3.exceptions.ProtocolError("Connection broken", "garbled chunk")

    assert classify_transport_error(requests.exceptions.ConnectionError(aborted)) is TransportFault.CONNECTION_RESET
    assert classify_transport_error(garbled) is TransportFault.PROTOCOL_ERROR


@pytest.mark.parametrize(
    "error",
    [
        RuntimeError("bummer"),
        ValueError("not json serializable"),
        OSError(errno.ENOENT, "No such file"),
        requests.HTTPError("503 Service Unavailable"),
        requests.exceptions.InvalidHeader("Invalid leading whitespace in header value"),
    ],
)
def test_unclassified_errors(error: BaseException) -> None:
    assert classify_transport_error(error) is None
