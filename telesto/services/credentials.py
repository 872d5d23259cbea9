"""Credential resolution.

Exactly one authentication mode is allowed per run: a standard API key,
or a premium client ID/private key pair with an optional channel.
"""

from __future__ import annotations

from typing import Optional

from ..domain.errors import (
    ChannelWithoutClientError,
    ConflictingCredentialsError,
    IncompleteClientCredentialsError,
    MissingCredentialsError,
)
from ..domain.models import ApiKey, ClientSigned, Credentials


def _present(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_credentials(
    api_key: Optional[str] = None,
    client_id: Optional[str] = None,
    private_key: Optional[str] = None,
    channel: Optional[str] = None,
) -> Credentials:
    """Resolve the supplied options into a single Credentials value.

    Empty or whitespace-only values count as not supplied.

    Raises:
        ConflictingCredentialsError: API key given alongside client credentials.
        IncompleteClientCredentialsError: Only one of client ID/private key given.
        ChannelWithoutClientError: Channel given without a client pair.
        MissingCredentialsError: Nothing given.
    """
    api_key = _present(api_key)
    client_id = _present(client_id)
    private_key = _present(private_key)
    channel = _present(channel)

    if api_key and (client_id or private_key):
        raise ConflictingCredentialsError(
            "an API key cannot be combined with a client ID/private key pair",
            setting_name="api_key",
        )
    if bool(client_id) != bool(private_key):
        missing = "private_key" if client_id else "client_id"
        raise IncompleteClientCredentialsError(
            "a client ID and a private key must be supplied together",
            setting_name=missing,
        )
    if channel and not (client_id and private_key):
        raise ChannelWithoutClientError(
            "a channel can only be supplied with a client ID/private key pair",
            setting_name="channel",
        )

    if api_key:
        return ApiKey(api_key)
    if client_id and private_key:
        return ClientSigned(client_id=client_id, private_key=private_key, channel=channel)

    raise MissingCredentialsError(
        "either an API key or a client ID/private key pair must be supplied"
    )
