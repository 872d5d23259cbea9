"""Directions batch service - Main orchestrator.

Runs the full pipeline for one batch:

1. Validate the raw rows (normalizing departure times)
2. Build and sign every request URL
3. Dispatch the requests concurrently
4. Aggregate the outcomes back into input order

Steps 1 and 2 complete for the whole batch before anything goes out on
the network, so an invalid row or a bad private key never produces a
partial run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional

from ..config import AppConfig, get_config
from ..domain.models import Credentials, OutputEntry
from ..ports.transport import TransportPort
from .aggregator import aggregate
from .departure import Instant, current_timestamp
from .dispatcher import ConcurrentDispatcher
from .signer import RequestSigner
from .validation import validate_rows


@dataclass
class DirectionsBatchService:
    """Main service for resolving a batch of route requests.

    Attributes:
        transport: HTTP transport used for every directions call
        config: Application configuration
        concurrency: Override for the configured dispatch concurrency
    """

    transport: TransportPort
    config: AppConfig = field(default_factory=get_config)
    concurrency: Optional[int] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def run(
        self,
        rows: Iterable[Mapping[str, Optional[str]]],
        credentials: Credentials,
        now: Optional[Instant] = None,
    ) -> List[OutputEntry]:
        """Resolve a batch of raw rows into ordered output entries.

        Args:
            rows: Raw CSV rows in input order.
            credentials: Resolved credentials for every request.
            now: Reference instant for departure times (defaults to now).

        Returns:
            One OutputEntry per row, in input order.

        Raises:
            InputError: If any row is invalid or an id is repeated.
            InvalidPrivateKeyEncodingError: If the private key cannot be decoded.
        """
        reference = now if now is not None else current_timestamp()

        signer = RequestSigner(credentials, config=self.config.directions)
        requests = validate_rows(rows, reference)
        signed = signer.sign_all(requests)

        dispatcher = ConcurrentDispatcher(
            self.transport,
            concurrency=self.concurrency or self.config.dispatch.concurrency,
        )
        outcomes = dispatcher.dispatch(signed)

        entries = aggregate(outcomes, [request.id for request in requests])
        self._logger.info(
            "Batch resolved",
            extra={
                "entries": len(entries),
                "failed": sum(1 for outcome in outcomes if not outcome.is_success),
            },
        )
        return entries
