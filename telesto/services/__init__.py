"""Services layer - Application orchestration.

This module contains the pipeline stages and the service that wires
them together:
- validation: raw rows to RouteRequests
- departure: departure time normalization
- credentials: credential mode resolution
- signer: request URL construction and signing
- dispatcher: bounded concurrent execution
- aggregator: ordered output assembly
- DirectionsBatchService: end-to-end batch orchestration
"""

from .aggregator import aggregate
from .batch_service import DirectionsBatchService
from .credentials import resolve_credentials
from .departure import normalize_departure_time
from .dispatcher import ConcurrentDispatcher
from .signer import RequestSigner, sign_path_and_query
from .validation import validate_rows

__all__ = [
    "DirectionsBatchService",
    "ConcurrentDispatcher",
    "RequestSigner",
    "aggregate",
    "normalize_departure_time",
    "resolve_credentials",
    "sign_path_and_query",
    "validate_rows",
]
