"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    AggregationError,
    ChannelWithoutClientError,
    ConfigurationError,
    ConflictingCredentialsError,
    DuplicateIdError,
    IncompleteClientCredentialsError,
    InputError,
    InputFileError,
    InvalidAvoidanceError,
    InvalidFieldError,
    InvalidModeError,
    InvalidPrivateKeyEncodingError,
    InvalidTrafficModelError,
    MissingColumnError,
    MissingCredentialsError,
    OutputError,
    TelestoError,
    TransportError,
)
from .models import (
    ApiKey,
    Avoidance,
    ClientSigned,
    Coordinate,
    Credentials,
    Mode,
    OutputEntry,
    RequestFailure,
    RequestOutcome,
    RouteRequest,
    SignedRequest,
    TrafficModel,
)

__all__ = [
    # Models
    "Coordinate",
    "Mode",
    "Avoidance",
    "TrafficModel",
    "RouteRequest",
    "ApiKey",
    "ClientSigned",
    "Credentials",
    "SignedRequest",
    "RequestFailure",
    "RequestOutcome",
    "OutputEntry",
    # Errors
    "TelestoError",
    "ConfigurationError",
    "ConflictingCredentialsError",
    "MissingCredentialsError",
    "IncompleteClientCredentialsError",
    "ChannelWithoutClientError",
    "InvalidPrivateKeyEncodingError",
    "InputError",
    "InputFileError",
    "MissingColumnError",
    "DuplicateIdError",
    "InvalidFieldError",
    "InvalidModeError",
    "InvalidAvoidanceError",
    "InvalidTrafficModelError",
    "TransportError",
    "AggregationError",
    "OutputError",
]
