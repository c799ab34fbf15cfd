"""
Exception hierarchy for the document service client.

Every failure surfaces as a subclass of DocClientError:
- InvalidArgumentError: rejected before any network call
- TransportError: the request never got a response (raised by the transport)
- ServiceError: the service answered with a failure envelope
- ResponseDecodeError: success status, but the body is unusable
"""


class DocClientError(Exception):
    """Base exception for document service client errors."""

    pass


class InvalidArgumentError(DocClientError, ValueError):
    """Caller-supplied arguments are missing or fail validation."""

    pass


class TransportError(DocClientError):
    """Request could not be completed by the transport."""

    pass


class TransportConnectionError(TransportError):
    """Failed to connect to the service, or the connection timed out."""

    pass


class ServiceError(DocClientError):
    """The service returned a failure response.

    Carries the decoded service error envelope verbatim.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        request_id: str | None = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.request_id = request_id

        detail = f"[Code: {code}; Message: {message}"
        if request_id:
            detail += f"; RequestId: {request_id}"
        super().__init__(f"Service error {status_code}: {detail}]")


class ResponseDecodeError(DocClientError):
    """Response body does not match the expected result schema."""

    def __init__(self, message: str, body: bytes | None = None):
        self.body = body
        super().__init__(message)


class ConfigValidationError(DocClientError):
    """Raised when configuration validation fails."""

    pass
