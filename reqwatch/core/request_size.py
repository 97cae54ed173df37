"""Approximate request size from an ASGI HTTP scope.

The estimate only uses data that is already buffered when the request enters
the middleware: the request line, the headers and the declared
``content-length``. The body itself is never read, so streamed or chunked
uploads without a declared length count their header bytes only.

Repeated header lines count their name once and every value, so
``X-A: 1`` followed by ``X-A: 2`` adds ``len("x-a") + 2`` bytes.
"""

from collections.abc import Iterable, Mapping
from typing import Any

UNKNOWN_CONTENT_LENGTH = -1


def _request_url(scope: Mapping[str, Any]) -> bytes:
    raw_path = scope.get("raw_path")
    if raw_path is None:
        path = scope.get("path")
        if path is None:
            return b""
        raw_path = path.encode("utf-8")
    query = scope.get("query_string") or b""
    if query:
        return raw_path + b"?" + query
    return raw_path


def _request_host(scope: Mapping[str, Any], headers: Iterable[tuple[bytes, bytes]]) -> bytes:
    for name, value in headers:
        if name.lower() == b"host":
            return value
    server = scope.get("server")
    if not server:
        return b""
    host, port = server
    if port is None:
        return host.encode("latin-1")
    return f"{host}:{port}".encode("latin-1")


def request_protocol(scope: Mapping[str, Any]) -> str:
    """Return the protocol string as ``HTTP/<major>.<minor>``.

    ASGI reports HTTP/2 and HTTP/3 as ``"2"`` and ``"3"``; those are widened
    to ``"2.0"`` and ``"3.0"``.
    """
    version = scope.get("http_version", "1.1")
    if "." not in version:
        version += ".0"
    return "HTTP/" + version


def declared_content_length(headers: Iterable[tuple[bytes, bytes]]) -> int:
    """Return the declared ``content-length`` or ``UNKNOWN_CONTENT_LENGTH``."""
    for name, value in headers:
        if name.lower() != b"content-length":
            continue
        try:
            length = int(value)
        except ValueError:
            return UNKNOWN_CONTENT_LENGTH
        return length if length >= 0 else UNKNOWN_CONTENT_LENGTH
    return UNKNOWN_CONTENT_LENGTH


def compute_approximate_request_size(scope: Mapping[str, Any]) -> int:
    """Estimate the size of a request in bytes.

    Sums the method, the protocol, every distinct header name once and every
    header value except ``host``, the host, the URL (path plus query string)
    and the declared content length when it is known.

    Args:
        scope: ASGI HTTP connection scope.

    Returns:
        The approximate request size in bytes.
    """
    headers = list(scope.get("headers") or ())

    size = len(scope.get("method", ""))
    size += len(request_protocol(scope))
    seen_names: set[bytes] = set()
    for name, value in headers:
        name = name.lower()
        # Counted separately below.
        if name == b"host":
            continue
        if name not in seen_names:
            seen_names.add(name)
            size += len(name)
        size += len(value)
    size += len(_request_host(scope, headers))
    size += len(_request_url(scope))

    content_length = declared_content_length(headers)
    if content_length != UNKNOWN_CONTENT_LENGTH:
        size += content_length
    return size
