"""requests-based HTTP transport adapter.

One requests.Session is shared by every dispatcher worker. Its
connection pool is sized to the dispatch concurrency so that workers
never queue for a socket.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from ...config import DirectionsConfig, get_config
from ...domain.errors import TransportError
from ...ports.transport import TransportResponse


@dataclass
class RequestsTransport:
    """HTTP transport implementing TransportPort with requests.

    Attributes:
        config: Directions endpoint configuration (timeout)
        pool_size: Maximum number of pooled connections per host
    """

    config: DirectionsConfig = field(default_factory=lambda: get_config().directions)
    pool_size: int = field(default_factory=lambda: get_config().dispatch.concurrency)

    _session: Optional[requests.Session] = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_session(self) -> requests.Session:
        """Get or lazily create the shared session."""
        with self._lock:
            if self._session is None:
                self._logger.debug(
                    "Initializing HTTP session",
                    extra={
                        "pool_size": self.pool_size,
                        "timeout": self.config.timeout_seconds,
                    },
                )
                session = requests.Session()
                adapter = HTTPAdapter(
                    pool_connections=self.pool_size, pool_maxsize=self.pool_size
                )
                session.mount("https://", adapter)
                session.mount("http://", adapter)
                self._session = session
            return self._session

    def get(self, url: str) -> TransportResponse:
        """Issue a GET request.

        Args:
            url: Fully formed request URL.

        Returns:
            Response status and text body.

        Raises:
            TransportError: On timeout or any connection-level failure.
        """
        session = self._get_session()
        prepared = session.prepare_request(requests.Request("GET", url))
        # Signed URLs must go out byte for byte; requests would re-quote "|".
        prepared.url = url
        settings = session.merge_environment_settings(url, {}, None, None, None)
        try:
            response = session.send(
                prepared, timeout=self.config.timeout_seconds, **settings
            )
        except requests.Timeout as e:
            raise TransportError(
                "Request timed out", url=url, timed_out=True, cause=e
            )
        except requests.RequestException as e:
            raise TransportError("Request failed", url=url, cause=e)

        return TransportResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        """Close the shared session, if one was created."""
        with self._lock:
            if self._session is not None:
                self._session.close()
                self._session = None
