"""Test fixtures and utilities."""

import json
from pathlib import Path

import pytest

from doc_client.document_client import DocumentServiceClient
from doc_client.request import Request, TransportResponse
from doc_client.transport import Transport


class RecordingTransport(Transport):
    """In-memory transport that records requests and replays queued responses."""

    def __init__(self):
        self.requests: list[Request] = []
        self.queued: list[TransportResponse | Exception] = []

    def queue(
        self,
        status_code: int = 200,
        json_body=None,
        body: bytes = b"",
        headers: dict | None = None,
        reason: str = "OK",
    ) -> None:
        if json_body is not None:
            body = json.dumps(json_body).encode("utf-8")
        self.queued.append(
            TransportResponse(
                status_code=status_code,
                body=body,
                headers=headers or {},
                reason=reason,
            )
        )

    def queue_error(self, error: Exception) -> None:
        self.queued.append(error)

    def send(self, request: Request) -> TransportResponse:
        self.requests.append(request)
        if not self.queued:
            raise AssertionError(f"Unexpected request: {request.method.value} {request.url_path()}")
        item = self.queued.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def last(self) -> Request:
        return self.requests[-1]


# Sample service payloads
SAMPLE_REGISTER_RESPONSE = {
    "documentId": "doc-imiumkt3jmwx8hhu",
    "bucket": "bkt-doc",
    "object": "doc/doc-imiumkt3jmwx8hhu/source.pdf",
    "bosEndpoint": "http://bj.bcebos.com",
}

SAMPLE_QUERY_RESPONSE = {
    "documentId": "abc123",
    "title": "Quarterly Report",
    "format": "pdf",
    "targetType": "h5",
    "status": "PUBLISHED",
    "uploadInfo": {
        "bucket": "bkt-doc",
        "object": "doc/abc123/source.pdf",
        "bosEndpoint": "http://bj.bcebos.com",
    },
    "publishInfo": {
        "pageCount": 12,
        "sizeInBytes": 348211,
        "coverUrl": "https://doc.bj.baidubce.com/cover/abc123.png",
        "publishTime": "2024-11-19T10:00:00Z",
    },
    "createTime": "2024-11-19T09:58:12Z",
    "notification": "doc-notify",
}

SAMPLE_READ_RESPONSE = {
    "documentId": "abc123",
    "docId": "abc123",
    "host": "https://doc.bj.baidubce.com",
    "token": "tok-8f2b6c",
    "createTime": "2024-11-19T10:05:00Z",
    "expireTime": "2024-11-19T11:05:00Z",
}

SAMPLE_IMAGES_RESPONSE = {
    "images": [
        {"url": "https://doc.bj.baidubce.com/img/abc123/1.png"},
        {"url": "https://doc.bj.baidubce.com/img/abc123/2.png"},
    ]
}

SAMPLE_ERROR_RESPONSE = {
    "code": "NotFound",
    "message": "The document does not exist",
    "requestId": "a4d1a5f2-5a6e-4f7c-9d0e-2b1c7e4f2a11",
}


def sample_list_response(ids: list[str], next_marker: str = "", truncated: bool = False) -> dict:
    return {
        "marker": "",
        "isTruncated": truncated,
        "nextMarker": next_marker,
        "maxSize": 10,
        "documents": [
            {"documentId": doc_id, "title": f"Document {doc_id}", "status": "PUBLISHED"}
            for doc_id in ids
        ],
    }


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(transport: RecordingTransport) -> DocumentServiceClient:
    return DocumentServiceClient(transport)


@pytest.fixture
def temp_config(tmp_path) -> Path:
    """Temporary config file path for testing."""
    return tmp_path / "config.yaml"
