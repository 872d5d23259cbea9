"""High-level pipeline orchestration for Telesto.

The pipeline is organized in several stages:

1. Credential resolution (command line, then environment).
2. Input acquisition (CSV file or standard input).
3. Batch resolution (validation, signing, dispatch, aggregation).
4. Output (JSON file or standard output).

This module wires these stages together without implementing any of
them; each step delegates to a dedicated, testable module.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, TextIO, Union

from .adapters.io import load_text, read_rows, write_output
from .config import AppConfig, DispatchConfig, get_config
from .container import Container
from .domain.models import Credentials, OutputEntry
from .services import DirectionsBatchService, resolve_credentials
from .services.departure import Instant

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def credentials_from_options(
    config: AppConfig,
    api_key: Optional[str] = None,
    client_id: Optional[str] = None,
    private_key: Optional[str] = None,
    channel: Optional[str] = None,
) -> Credentials:
    """Resolve credentials from command-line values.

    When no credential option at all is given on the command line, the
    TELESTO_API_KEY / TELESTO_CLIENT_ID / TELESTO_PRIVATE_KEY /
    TELESTO_CHANNEL settings are used instead. The two sources are never
    mixed.
    """
    if not any((api_key, client_id, private_key, channel)):
        fallback = config.credentials
        return resolve_credentials(
            api_key=fallback.api_key,
            client_id=fallback.client_id,
            private_key=fallback.private_key,
            channel=fallback.channel,
        )
    return resolve_credentials(
        api_key=api_key, client_id=client_id, private_key=private_key, channel=channel
    )


def with_concurrency(config: AppConfig, concurrency: Optional[int]) -> AppConfig:
    """Return a copy of config whose dispatch bound is concurrency.

    The transport connection pool is sized from this value, so an override
    has to be applied before the container is built.
    """
    if concurrency is None:
        return config
    return config.model_copy(
        update={"dispatch": DispatchConfig(concurrency=concurrency)}
    )


def run_batch(
    credentials: Credentials,
    input_path: Optional[PathLike] = None,
    output_path: Optional[PathLike] = None,
    *,
    container: Optional[Container] = None,
    concurrency: Optional[int] = None,
    now: Optional[Instant] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> List[OutputEntry]:
    """Run one batch end to end and write the result.

    Args:
        credentials: Resolved credentials.
        input_path: CSV input file; standard input when None.
        output_path: JSON output file; standard output when None.
        container: DI container providing the batch service.
        concurrency: Override for the configured concurrency bound.
        now: Reference instant for departure times (defaults to now).

    Returns:
        The output entries that were written.

    Raises:
        TelestoError: On any fatal configuration, input or output error.
    """
    if container is None:
        config = with_concurrency(get_config(), concurrency)
        container = Container.create_default(config)
    service: DirectionsBatchService = container.resolve(DirectionsBatchService)
    if concurrency is not None:
        service.concurrency = concurrency

    try:
        text = load_text(input_path, stream=stdin)
        rows = read_rows(text)
        logger.info(
            "Loaded input",
            extra={
                "source": str(input_path) if input_path else "<stdin>",
                "rows": len(rows),
            },
        )
        entries = service.run(rows, credentials, now=now)
    finally:
        service.transport.close()

    write_output(entries, output_path, stream=stdout)
    logger.info(
        "Wrote output",
        extra={"destination": str(output_path) if output_path else "<stdout>"},
    )
    return entries


def format_error(error: BaseException) -> str:
    """Render an error and its chain of causes for the terminal."""
    out = f"Error occurred: {getattr(error, 'summary', error)}"
    seen = {id(error)}
    cause = getattr(error, "cause", None) or error.__cause__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        out += f"\n -> {getattr(cause, 'summary', cause)}"
        cause = getattr(cause, "cause", None) or cause.__cause__
    return out
