"""
Transports for the document service client.

Provides:
- Transport: abstract request-in, response-out interface
- RequestsTransport: default implementation over a requests.Session
"""

from .base import Transport
from .requests_transport import RequestsTransport

__all__ = [
    "Transport",
    "RequestsTransport",
]
