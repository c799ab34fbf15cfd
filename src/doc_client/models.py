"""
Parameter and result value objects for the document service.

Params are built by callers and serialized onto the request. Results are
built from response JSON via ``from_api_response``; a missing required key
raises KeyError, which the codec reports as a decode error.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from .errors import InvalidArgumentError


class DocumentStatus(str, Enum):
    """Lifecycle states owned by the document service."""

    UPLOADING = "UPLOADING"
    PROCESSING = "PROCESSING"
    PUBLISHED = "PUBLISHED"
    FAILED = "FAILED"


# =============================================================================
# Params
# =============================================================================


@dataclass(frozen=True)
class RegisterParams:
    """Title and format of the document being registered."""

    title: str
    format: str
    # Conversion target, e.g. "h5" or "image"
    target_type: str | None = None
    # Name of a notification configured on the service
    notification: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the registration body."""
        result: dict[str, Any] = {
            "title": self.title,
            "format": self.format,
        }
        if self.target_type is not None:
            result["targetType"] = self.target_type
        if self.notification is not None:
            result["notification"] = self.notification
        return result


@dataclass(frozen=True)
class QueryParams:
    """Whether the returned cover URL should use HTTPS."""

    use_https: bool = False


@dataclass(frozen=True)
class ReadParams:
    """Requested lifetime of the read token."""

    expire_in_seconds: int


@dataclass(frozen=True)
class ListParams:
    """Optional filters for listing documents.

    Empty status, empty marker and ``max_size == 0`` mean "not set" and are
    left off the request.
    """

    status: DocumentStatus | str | None = None
    marker: str = ""
    max_size: int = 0

    @property
    def status_value(self) -> str:
        if self.status is None:
            return ""
        if isinstance(self.status, DocumentStatus):
            return self.status.value
        return self.status


@dataclass(frozen=True)
class ListPolicy:
    """Validity constraints applied to ListParams before a request is built."""

    max_size_limit: int = 200
    allowed_statuses: frozenset[str] = field(
        default_factory=lambda: frozenset(s.value for s in DocumentStatus)
    )

    def check(self, params: ListParams) -> None:
        """Validate list params.

        Raises:
            InvalidArgumentError: If max_size is out of range or the status
                is not recognized
        """
        if isinstance(params.max_size, bool) or not isinstance(params.max_size, int):
            raise InvalidArgumentError(
                f"maxSize must be an integer, got {type(params.max_size).__name__}"
            )
        if params.max_size < 0 or params.max_size > self.max_size_limit:
            raise InvalidArgumentError(
                f"maxSize must be between 0 and {self.max_size_limit}, got {params.max_size}"
            )
        status = params.status_value
        if status and status not in self.allowed_statuses:
            allowed = ", ".join(sorted(self.allowed_statuses))
            raise InvalidArgumentError(f"Invalid status '{status}', expected one of: {allowed}")
        if not isinstance(params.marker, str):
            raise InvalidArgumentError("marker must be a string")


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class RegisterResult:
    """Document id and the storage location to upload the source file to."""

    document_id: str
    bucket: str = ""
    object: str = ""
    bos_endpoint: str = ""

    @property
    def location(self) -> str:
        """Storage URL of the document's source object."""
        if not self.bos_endpoint:
            return ""
        return f"{self.bos_endpoint.rstrip('/')}/{self.bucket}/{self.object}"

    @classmethod
    def from_api_response(cls, data: dict) -> "RegisterResult":
        return cls(
            document_id=_require_str(data, "documentId"),
            bucket=data.get("bucket") or "",
            object=data.get("object") or "",
            bos_endpoint=data.get("bosEndpoint") or "",
        )


@dataclass(frozen=True)
class UploadInfo:
    bucket: str = ""
    object: str = ""
    bos_endpoint: str = ""

    @classmethod
    def from_api_response(cls, data: dict) -> "UploadInfo":
        return cls(
            bucket=data.get("bucket") or "",
            object=data.get("object") or "",
            bos_endpoint=data.get("bosEndpoint") or "",
        )


@dataclass(frozen=True)
class PublishInfo:
    page_count: int | None = None
    size_in_bytes: int | None = None
    cover_url: str | None = None
    publish_time: str | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "PublishInfo":
        return cls(
            page_count=data.get("pageCount"),
            size_in_bytes=data.get("sizeInBytes"),
            cover_url=data.get("coverUrl"),
            publish_time=data.get("publishTime"),
        )


@dataclass(frozen=True)
class DocumentError:
    """Conversion failure reported for a FAILED document."""

    code: str = ""
    message: str = ""

    @classmethod
    def from_api_response(cls, data: dict) -> "DocumentError":
        return cls(code=data.get("code") or "", message=data.get("message") or "")


@dataclass(frozen=True)
class DocumentSummary:
    """One document as described by the service.

    ``raw`` keeps the full JSON object so fields this client does not model
    are still available to callers.
    """

    document_id: str
    title: str | None = None
    format: str | None = None
    target_type: str | None = None
    status: str | None = None
    create_time: str | None = None
    upload_info: UploadInfo | None = None
    publish_info: PublishInfo | None = None
    error: DocumentError | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def cover_url(self) -> str | None:
        return self.publish_info.cover_url if self.publish_info else None

    @classmethod
    def from_api_response(cls, data: dict) -> "DocumentSummary":
        upload_info = _optional_object(data, "uploadInfo")
        publish_info = _optional_object(data, "publishInfo")
        error = _optional_object(data, "error")
        return cls(
            document_id=_require_str(data, "documentId"),
            title=data.get("title"),
            format=data.get("format"),
            target_type=data.get("targetType"),
            status=data.get("status"),
            create_time=data.get("createTime"),
            upload_info=UploadInfo.from_api_response(upload_info) if upload_info else None,
            publish_info=PublishInfo.from_api_response(publish_info) if publish_info else None,
            error=DocumentError.from_api_response(error) if error else None,
            raw=dict(data),
        )


@dataclass(frozen=True)
class QueryResult(DocumentSummary):
    """Full status of a single document. ``status`` is always present."""

    @classmethod
    def from_api_response(cls, data: dict) -> "QueryResult":
        _require_str(data, "status")
        summary = DocumentSummary.from_api_response(data)
        return cls(**{f.name: getattr(summary, f.name) for f in fields(summary)})


@dataclass(frozen=True)
class ReadResult:
    """Token and host used by client-side rendering SDKs."""

    document_id: str
    token: str
    doc_id: str | None = None
    host: str | None = None
    create_time: str | None = None
    expire_time: str | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "ReadResult":
        return cls(
            document_id=_require_str(data, "documentId"),
            token=_require_str(data, "token"),
            doc_id=data.get("docId"),
            host=data.get("host"),
            create_time=data.get("createTime"),
            expire_time=data.get("expireTime"),
        )


@dataclass(frozen=True)
class ImagesResult:
    """Image URLs generated by the conversion, in page order."""

    images: tuple[str, ...] = ()

    @classmethod
    def from_api_response(cls, data: dict) -> "ImagesResult":
        images = data["images"]
        if not isinstance(images, list):
            raise TypeError(f"'images' must be a list, got {type(images).__name__}")
        urls = []
        for item in images:
            if isinstance(item, dict):
                urls.append(_require_str(item, "url"))
            elif isinstance(item, str):
                urls.append(item)
            else:
                raise TypeError(f"Unexpected image entry: {item!r}")
        return cls(images=tuple(urls))


@dataclass(frozen=True)
class ListResult:
    """One page of documents plus the cursor for the next page."""

    documents: tuple[DocumentSummary, ...] = ()
    marker: str = ""
    next_marker: str = ""
    is_truncated: bool = False
    max_size: int | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "ListResult":
        documents = data["documents"]
        if not isinstance(documents, list):
            raise TypeError(f"'documents' must be a list, got {type(documents).__name__}")
        return cls(
            documents=tuple(DocumentSummary.from_api_response(d) for d in documents),
            marker=data.get("marker") or "",
            next_marker=data.get("nextMarker") or "",
            is_truncated=bool(data.get("isTruncated", False)),
            max_size=data.get("maxSize"),
        )


def _require_str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_object(data: dict, key: str) -> dict | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise TypeError(f"'{key}' must be an object, got {type(value).__name__}")
    return value
