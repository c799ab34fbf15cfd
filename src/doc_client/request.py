"""
Request descriptor and transport response holder.

A Request describes one HTTP call before transmission: URI, ordered query
parameters, method, headers and an optional body. A TransportResponse is
what the transport hands back; it knows how to tell success from failure
and how to decode either the typed body or the service error envelope.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar
from urllib.parse import quote

from .codec import decode_json, decode_result
from .errors import ResponseDecodeError, ServiceError

CONTENT_TYPE = "Content-Type"
DEFAULT_CONTENT_TYPE = "application/json; charset=utf-8"
REQUEST_ID_HEADER = "x-bce-request-id"

T = TypeVar("T")


class HttpMethod(str, Enum):
    """HTTP methods used by the document service."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


def _encode(value: str) -> str:
    return quote(value, safe="-_.~")


@dataclass
class Request:
    """Structured representation of an HTTP call prior to transmission.

    Query parameters keep insertion order. A parameter whose value is the
    empty string is a bare flag and renders as ``key`` instead of ``key=``.
    """

    uri: str = "/"
    method: HttpMethod = HttpMethod.GET
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def set_uri(self, uri: str) -> None:
        self.uri = uri

    def set_method(self, method: HttpMethod) -> None:
        self.method = method

    def set_param(self, key: str, value: str) -> None:
        self.params[key] = value

    def set_header(self, key: str, value: str) -> None:
        self.headers[key] = value

    def set_body(self, body: bytes) -> None:
        self.body = body

    def query_string(self) -> str:
        """Render query parameters as they go on the wire."""
        parts = []
        for key, value in self.params.items():
            if value == "":
                parts.append(_encode(key))
            else:
                parts.append(f"{_encode(key)}={_encode(value)}")
        return "&".join(parts)

    def url_path(self) -> str:
        """Path plus query string, e.g. ``/v2/document/abc?read``."""
        query = self.query_string()
        return f"{self.uri}?{query}" if query else self.uri


@dataclass
class TransportResponse:
    """Response as reported by a transport."""

    status_code: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    reason: str = ""

    def is_fail(self) -> bool:
        return not 200 <= self.status_code < 300

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def json_body(self) -> Any:
        return decode_json(self.body)

    def parse_json_body(self, result_cls: type[T]) -> T:
        """Decode the success body into ``result_cls``."""
        return decode_result(self.body, result_cls)

    def service_error(self) -> ServiceError:
        """Decode the service error envelope.

        Falls back to the HTTP reason phrase and the request id header when
        the body is missing or is not a JSON envelope.
        """
        code = self.reason or str(self.status_code)
        message = self.reason or f"HTTP {self.status_code}"
        request_id = self.header(REQUEST_ID_HEADER)

        try:
            data = self.json_body()
        except ResponseDecodeError:
            data = None

        if isinstance(data, dict):
            code = str(data.get("code") or code)
            message = str(data.get("message") or message)
            request_id = data.get("requestId") or request_id

        return ServiceError(
            status_code=self.status_code,
            code=code,
            message=message,
            request_id=request_id,
        )
