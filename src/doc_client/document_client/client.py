"""
Document service API client implementation.
"""

import logging
from typing import Iterator, TypeVar
from urllib.parse import quote

from ..codec import encode_body
from ..config import DocServiceConfig
from ..errors import InvalidArgumentError
from ..models import (
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
from ..request import CONTENT_TYPE, DEFAULT_CONTENT_TYPE, HttpMethod, Request
from ..transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)

DOCUMENT_URI = "/v2/document"

T = TypeVar("T")


def _document_uri(document_id: str) -> str:
    if not isinstance(document_id, str) or not document_id:
        raise InvalidArgumentError("documentId must be a non-empty string")
    return f"{DOCUMENT_URI}/{quote(document_id, safe='')}"


def _new_request(uri: str, method: HttpMethod) -> Request:
    req = Request()
    req.set_uri(uri)
    req.set_method(method)
    req.set_header(CONTENT_TYPE, DEFAULT_CONTENT_TYPE)
    return req


class DocumentServiceClient:
    """
    Client for the document service API.

    Each method maps to exactly one request/response round trip through the
    injected transport. Errors are never caught here:
    - InvalidArgumentError before anything is sent
    - TransportError straight from the transport
    - ServiceError when the service answers with a failure envelope
    - ResponseDecodeError when a success body cannot be decoded
    """

    def __init__(self, transport: Transport, list_policy: ListPolicy | None = None):
        self.transport = transport
        self.list_policy = list_policy or ListPolicy()

    @classmethod
    def from_config(cls, config: DocServiceConfig) -> "DocumentServiceClient":
        """Build a client using the default requests transport."""
        transport = RequestsTransport(
            endpoint=config.endpoint,
            token=config.token or None,
            timeout=config.timeout_seconds,
            max_retries=config.max_retries,
            backoff_factor=config.backoff_factor,
        )
        return cls(transport, list_policy=config.list_policy.to_policy())

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "DocumentServiceClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _send(self, req: Request) -> None:
        resp = self.transport.send(req)
        if resp.is_fail():
            raise resp.service_error()

    def _send_and_parse(self, req: Request, result_cls: type[T]) -> T:
        resp = self.transport.send(req)
        if resp.is_fail():
            raise resp.service_error()
        return resp.parse_json_body(result_cls)

    def register_document(self, params: RegisterParams) -> RegisterResult:
        """
        Register a document with the service.

        Args:
            params: Title and format of the document being registered

        Returns:
            RegisterResult with the document id and its storage location
        """
        if params is None:
            raise InvalidArgumentError("params cannot be None")

        req = _new_request(DOCUMENT_URI, HttpMethod.POST)
        req.set_param("register", "")
        req.set_body(encode_body(params))

        result = self._send_and_parse(req, RegisterResult)
        logger.info(f"Registered document id={result.document_id}")
        return result

    def publish_document(self, document_id: str) -> None:
        """Publish a registered document once its source file is uploaded."""
        req = _new_request(_document_uri(document_id), HttpMethod.PUT)
        req.set_param("publish", "")

        self._send(req)
        logger.info(f"Published document id={document_id}")

    def query_document(
        self, document_id: str, params: QueryParams | None = None
    ) -> QueryResult:
        """
        Query a document's status.

        Args:
            document_id: Id of the document
            params: Enable/disable HTTPS for the cover URL; when None the
                ``https`` parameter is not sent at all

        Returns:
            QueryResult
        """
        req = _new_request(_document_uri(document_id), HttpMethod.GET)
        if params is not None:
            req.set_param("https", "true" if params.use_https else "false")

        return self._send_and_parse(req, QueryResult)

    def read_document(
        self, document_id: str, params: ReadParams | None = None
    ) -> ReadResult:
        """
        Get a read token for client-side rendering.

        Args:
            document_id: Id of the document
            params: Expiration of the token; when None ``expireInSeconds``
                is not sent

        Returns:
            ReadResult

        Raises:
            InvalidArgumentError: If the expiration is not an integer
        """
        if params is not None:
            expire = params.expire_in_seconds
            if not isinstance(expire, int) or isinstance(expire, bool):
                raise InvalidArgumentError(
                    f"expireInSeconds must be an integer, got {expire!r}"
                )

        req = _new_request(_document_uri(document_id), HttpMethod.GET)
        req.set_param("read", "")
        if params is not None:
            req.set_param("expireInSeconds", str(params.expire_in_seconds))

        return self._send_and_parse(req, ReadResult)

    def get_images(self, document_id: str) -> ImagesResult:
        """Get the list of images generated by the document conversion."""
        req = _new_request(_document_uri(document_id), HttpMethod.GET)
        req.set_param("getImages", "")

        return self._send_and_parse(req, ImagesResult)

    def delete_document(self, document_id: str) -> None:
        """Delete a document."""
        req = _new_request(_document_uri(document_id), HttpMethod.DELETE)

        self._send(req)
        logger.info(f"Deleted document id={document_id}")

    def list_documents(self, params: ListParams | None = None) -> ListResult:
        """
        List one page of documents.

        Args:
            params: Optional status/marker/maxSize filters; each is sent
                only when set

        Returns:
            ListResult with the documents and pagination info

        Raises:
            InvalidArgumentError: If the filters fail the list policy
        """
        params = params if params is not None else ListParams()
        self.list_policy.check(params)

        req = Request()
        req.set_uri(f"{DOCUMENT_URI}/")
        req.set_method(HttpMethod.GET)
        if params.status_value:
            req.set_param("status", params.status_value)
        if params.marker:
            req.set_param("marker", params.marker)
        if params.max_size != 0:
            req.set_param("maxSize", str(params.max_size))

        return self._send_and_parse(req, ListResult)

    def iter_documents(self, params: ListParams | None = None) -> Iterator[DocumentSummary]:
        """
        Iterate over all documents, following pagination markers.

        Args:
            params: Filters applied to every page; ``marker`` sets the
                starting point

        Yields:
            DocumentSummary objects
        """
        params = params if params is not None else ListParams()
        while True:
            page = self.list_documents(params)
            yield from page.documents

            if not page.is_truncated or not page.next_marker:
                break
            # A marker that does not advance would request the same page forever
            if page.next_marker == params.marker:
                logger.warning(f"List marker did not advance ({page.next_marker}), stopping")
                break
            params = ListParams(
                status=params.status,
                marker=page.next_marker,
                max_size=params.max_size,
            )
