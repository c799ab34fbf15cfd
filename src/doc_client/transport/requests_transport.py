"""
Transport implementation backed by requests.
"""

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..errors import TransportConnectionError, TransportError
from ..request import Request, TransportResponse
from .base import Transport

logger = logging.getLogger(__name__)


class RequestsTransport(Transport):
    """
    Sends requests through a pooled requests.Session.

    Features:
    - Static bearer token header (no request signing)
    - Optional transport-level retry with backoff (off by default)
    - requests failures mapped to TransportError
    """

    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        endpoint: str,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        backoff_factor: float = 0.5,
        session: requests.Session | None = None,
    ):
        """
        Initialize the transport.

        Args:
            endpoint: Service base URL (e.g., "https://doc.bj.baidubce.com")
            token: Optional API token sent as a Bearer Authorization header
            timeout: Request timeout in seconds
            max_retries: Retry attempts for transient failures (0 disables)
            backoff_factor: Backoff factor for retries
            session: Pre-configured session to use instead of a new one
        """
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

        if session is None:
            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=backoff_factor,
                status_forcelist=[429, 500, 502, 503, 504],
                allowed_methods=["GET", "PUT", "DELETE"],
                raise_on_status=False,
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def send(self, request: Request) -> TransportResponse:
        url = f"{self.endpoint}{request.url_path()}"

        logger.debug(f"API Request: {request.method.value} {url}")

        try:
            response = self.session.request(
                method=request.method.value,
                url=url,
                headers=request.headers,
                data=request.body,
                timeout=self.timeout,
            )
        except requests.exceptions.ConnectionError as e:
            raise TransportConnectionError(
                f"Failed to connect to document service at {self.endpoint}: {e}"
            ) from e
        except requests.exceptions.Timeout as e:
            raise TransportConnectionError(f"Request to document service timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}") from e

        logger.debug(f"Response status: {response.status_code}")

        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
            reason=response.reason or "",
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
