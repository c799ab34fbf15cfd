"""
JSON codec for request bodies and response bodies.
"""

import json
from typing import Any, Protocol, TypeVar

from .errors import ResponseDecodeError


class Serializable(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


T = TypeVar("T")


def encode_body(params: Serializable) -> bytes:
    """Serialize a parameter object to a UTF-8 JSON body."""
    return json.dumps(params.to_dict(), ensure_ascii=False).encode("utf-8")


def decode_json(body: bytes | None) -> Any:
    """Parse a response body as JSON.

    Raises:
        ResponseDecodeError: If the body is empty or not valid JSON
    """
    if not body:
        raise ResponseDecodeError("Empty response body", body=body)
    try:
        return json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ResponseDecodeError(f"Response body is not valid JSON: {e}", body=body) from e


def decode_result(body: bytes | None, result_cls: type[T]) -> T:
    """Decode a response body into a typed result.

    The result class provides ``from_api_response(data)``. Missing keys or
    mistyped values while building it are reported as ResponseDecodeError.
    """
    data = decode_json(body)
    if not isinstance(data, dict):
        raise ResponseDecodeError(
            f"Expected a JSON object for {result_cls.__name__}, got {type(data).__name__}",
            body=body,
        )
    try:
        return result_cls.from_api_response(data)  # type: ignore[attr-defined]
    except KeyError as e:
        raise ResponseDecodeError(
            f"{result_cls.__name__}: missing required field {e}", body=body
        ) from e
    except (TypeError, ValueError, AttributeError) as e:
        raise ResponseDecodeError(f"{result_cls.__name__}: {e}", body=body) from e
