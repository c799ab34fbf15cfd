"""
Transport interface consumed by the document service client.
"""

from abc import ABC, abstractmethod

from ..request import Request, TransportResponse


class Transport(ABC):
    """
    Executes one request descriptor and reports the response.

    Implementations own authentication, connection handling and network
    I/O. They raise TransportError (or a subclass) when no response could
    be obtained; failure statuses are returned, not raised. A transport
    shared by concurrent callers must itself be safe for concurrent use.
    """

    @abstractmethod
    def send(self, request: Request) -> TransportResponse:
        """Send the request and return the service's response."""
        pass

    def close(self) -> None:
        """Release connections held by the transport."""
