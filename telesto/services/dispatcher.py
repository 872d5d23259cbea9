"""Concurrent dispatch of signed directions requests.

A fixed-size thread pool drains the queue of signed requests; a worker
picks up the next request as soon as its current call finishes. Every
request yields exactly one RequestOutcome: a failing call is recorded
in its own outcome and never aborts its siblings. There are no retries.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Sequence

from ..config import get_config
from ..domain.errors import TransportError
from ..domain.models import RequestFailure, RequestOutcome, SignedRequest
from ..ports.transport import TransportPort


@dataclass
class ConcurrentDispatcher:
    """Executes one transport call per SignedRequest under a concurrency bound.

    Attributes:
        transport: HTTP transport shared by all workers
        concurrency: Maximum number of calls in flight at once
    """

    transport: TransportPort
    concurrency: int = field(default_factory=lambda: get_config().dispatch.concurrency)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")
        self._logger = logging.getLogger(__name__)

    def execute(self, request: SignedRequest) -> RequestOutcome:
        """Run a single call and wrap its result; never raises."""
        started = time.perf_counter()
        try:
            response = self.transport.get(request.url)
        except TransportError as e:
            kind = "timeout" if e.timed_out else "network"
            outcome = RequestOutcome.failed(
                request.id,
                RequestFailure(kind=kind, message=str(e), status_code=e.status_code),
            )
        except Exception as e:
            self._logger.exception(
                "Unexpected error during directions call",
                extra={"request_id": request.id},
            )
            outcome = RequestOutcome.failed(
                request.id, RequestFailure(kind="network", message=str(e))
            )
        else:
            if response.ok:
                outcome = RequestOutcome.succeeded(request.id, response.body)
            else:
                outcome = RequestOutcome.failed(
                    request.id,
                    RequestFailure(
                        kind="http_status",
                        message=f"server responded with HTTP {response.status_code}",
                        status_code=response.status_code,
                    ),
                )

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        if outcome.is_success:
            self._logger.debug(
                "Directions call succeeded",
                extra={"request_id": request.id, "duration_ms": duration_ms},
            )
        else:
            self._logger.warning(
                "Directions call failed",
                extra={
                    "request_id": request.id,
                    "duration_ms": duration_ms,
                    "error": outcome.failure.message if outcome.failure else None,
                },
            )
        return outcome

    def dispatch(self, requests: Sequence[SignedRequest]) -> List[RequestOutcome]:
        """Execute all requests and return their outcomes in completion order.

        Args:
            requests: Signed requests to execute.

        Returns:
            One RequestOutcome per request, in no particular order.
        """
        if not requests:
            return []

        started = time.perf_counter()
        workers = min(self.concurrency, len(requests))
        outcomes: List[RequestOutcome] = []

        self._logger.info(
            "Dispatching requests",
            extra={"requests": len(requests), "workers": workers},
        )

        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="directions-worker"
        ) as executor:
            futures = [executor.submit(self.execute, request) for request in requests]
            for future in as_completed(futures):
                outcomes.append(future.result())

        failed = sum(1 for outcome in outcomes if not outcome.is_success)
        self._logger.info(
            "Dispatch complete",
            extra={
                "requests": len(outcomes),
                "succeeded": len(outcomes) - failed,
                "failed": failed,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return outcomes
