"""
Document service API client.

Provides:
- Register, publish and delete documents
- Query document status and cover URL
- Read tokens for client-side rendering
- Converted page images
- Paged document listing with client-side filter validation
"""

from .client import DOCUMENT_URI, DocumentServiceClient

__all__ = [
    "DOCUMENT_URI",
    "DocumentServiceClient",
]
