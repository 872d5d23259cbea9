"""Request URL construction and signing.

Standard plan requests carry the API key as a plain query parameter.
Premium plan requests carry the client ID (and channel) and a signature:
HMAC-SHA1, keyed with the URL-safe base64 decoded private key, over the
UTF-8 bytes of "<path>?<query>", re-encoded as URL-safe base64.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..config import DirectionsConfig, get_config
from ..domain.errors import InvalidPrivateKeyEncodingError
from ..domain.models import ApiKey, ClientSigned, Credentials, RouteRequest, SignedRequest

_URLSAFE_B64 = re.compile(r"^[A-Za-z0-9_-]*={0,2}$")


def decode_private_key(private_key: str) -> bytes:
    """Decode a URL-safe base64 private key.

    Missing padding is tolerated; characters outside the URL-safe
    alphabet are not.

    Raises:
        InvalidPrivateKeyEncodingError: If the key cannot be decoded.
    """
    key = private_key.strip()
    if not key or not _URLSAFE_B64.match(key):
        raise InvalidPrivateKeyEncodingError(
            "private key is not valid URL-safe base64", setting_name="private_key"
        )
    key = key.rstrip("=")
    key += "=" * (-len(key) % 4)
    try:
        return base64.urlsafe_b64decode(key)
    except (binascii.Error, ValueError) as e:
        raise InvalidPrivateKeyEncodingError(
            "private key is not valid URL-safe base64",
            setting_name="private_key",
            cause=e,
        )


def _signature(key: bytes, path_and_query: str) -> str:
    digest = hmac.new(key, path_and_query.encode("utf-8"), hashlib.sha1).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")


def sign_path_and_query(path_and_query: str, private_key: str) -> str:
    """Compute the URL signature for a path and query string.

    Args:
        path_and_query: e.g. "/maps/api/directions/json?origin=...&client=..."
        private_key: URL-safe base64 encoded signing key.

    Returns:
        URL-safe base64 HMAC-SHA1 digest, padded.
    """
    return _signature(decode_private_key(private_key), path_and_query)


@dataclass
class RequestSigner:
    """Builds SignedRequests for one set of credentials.

    The private key is decoded once on construction, so a bad key fails
    before any request is built.

    Attributes:
        credentials: Resolved credentials shared by every request
        config: Directions endpoint configuration
    """

    credentials: Credentials
    config: DirectionsConfig = field(default_factory=lambda: get_config().directions)

    _key: Optional[bytes] = field(default=None, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if isinstance(self.credentials, ClientSigned):
            self._key = decode_private_key(self.credentials.private_key)

    @property
    def base_url(self) -> str:
        return self.config.base_url.rstrip("/")

    def sign(self, request: RouteRequest) -> SignedRequest:
        """Build the complete request URL for one RouteRequest."""
        path_and_query = f"{self.config.path}?{request.query_string()}"

        if isinstance(self.credentials, ApiKey):
            url = f"{self.base_url}{path_and_query}&key={self.credentials.value}"
            return SignedRequest(id=request.id, url=url)

        path_and_query += f"&client={self.credentials.client_id}"
        if self.credentials.channel:
            path_and_query += f"&channel={self.credentials.channel}"

        signature = _signature(self._key or b"", path_and_query)
        url = f"{self.base_url}{path_and_query}&signature={signature}"
        return SignedRequest(id=request.id, url=url)

    def sign_all(self, requests: Iterable[RouteRequest]) -> List[SignedRequest]:
        """Sign a whole batch, preserving order."""
        signed = [self.sign(request) for request in requests]
        self._logger.info(
            "Built request URLs",
            extra={
                "requests": len(signed),
                "signed": isinstance(self.credentials, ClientSigned),
            },
        )
        return signed
