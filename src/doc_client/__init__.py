"""
Python client for the DOC document-processing service.

Builds one HTTP request per document operation (register, publish, query,
read, get images, delete, list), sends it through a pluggable transport and
decodes the JSON response into typed, immutable results.
"""

from .document_client import DocumentServiceClient
from .errors import (
    ConfigValidationError,
    DocClientError,
    InvalidArgumentError,
    ResponseDecodeError,
    ServiceError,
    TransportConnectionError,
    TransportError,
)
from .models import (
    DocumentStatus,
    DocumentSummary,
    ImagesResult,
    ListParams,
    ListPolicy,
    ListResult,
    QueryParams,
    QueryResult,
    ReadParams,
    ReadResult,
    RegisterParams,
    RegisterResult,
)
from .transport import RequestsTransport, Transport

__version__ = "0.1.0"

__all__ = [
    "DocumentServiceClient",
    "Transport",
    "RequestsTransport",
    "DocClientError",
    "InvalidArgumentError",
    "TransportError",
    "TransportConnectionError",
    "ServiceError",
    "ResponseDecodeError",
    "ConfigValidationError",
    "DocumentStatus",
    "DocumentSummary",
    "RegisterParams",
    "RegisterResult",
    "QueryParams",
    "QueryResult",
    "ReadParams",
    "ReadResult",
    "ImagesResult",
    "ListParams",
    "ListPolicy",
    "ListResult",
]
