"""Typed domain errors for Telesto.

Errors fall in three families:

- configuration errors, raised while resolving credentials or building
  the signer; they abort the run before anything is dispatched
- input errors, raised while validating the CSV batch; they also abort
  the run and identify the offending line and row id
- transport errors, raised by a single directions call; the dispatcher
  captures them into that request's outcome and the batch carries on

All errors inherit from TelestoError and can optionally wrap a root
cause exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TelestoError(Exception):
    """Base error for the Telesto domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    @property
    def summary(self) -> str:
        """The message without its cause."""
        return self.message

    def __str__(self) -> str:
        if self.cause:
            return f"{self.summary}: {self.cause}"
        return self.summary

    def __post_init__(self) -> None:
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass
class ConfigurationError(TelestoError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""


@dataclass
class ConflictingCredentialsError(ConfigurationError):
    """Both an API key and a client ID/private key pair were supplied."""


@dataclass
class MissingCredentialsError(ConfigurationError):
    """Neither an API key nor a client ID/private key pair was supplied."""


@dataclass
class IncompleteClientCredentialsError(ConfigurationError):
    """Only one half of the client ID/private key pair was supplied."""


@dataclass
class ChannelWithoutClientError(ConfigurationError):
    """A channel was supplied without a client ID/private key pair."""


@dataclass
class InvalidPrivateKeyEncodingError(ConfigurationError):
    """The private key is not valid URL-safe base64."""


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


@dataclass
class InputError(TelestoError):
    """The input batch is invalid.

    Attributes:
        line: 1-based data line of the offending row, if known
        row_id: Identifier of the offending row, if known
    """

    line: Optional[int] = None
    row_id: Optional[str] = None

    @property
    def summary(self) -> str:
        location = []
        if self.line is not None:
            location.append(f"line {self.line}")
        if self.row_id:
            location.append(f"id {self.row_id!r}")
        if location:
            return f"invalid contents on {', '.join(location)}: {self.message}"
        return self.message


@dataclass
class InputFileError(InputError):
    """The input file could not be opened or read.

    Attributes:
        path: Path that was supplied
    """

    path: Optional[str] = None


@dataclass
class MissingColumnError(InputError):
    """A required CSV column is absent from the header.

    Attributes:
        column: Name of the missing column
    """

    column: str = ""


@dataclass
class DuplicateIdError(InputError):
    """Two rows of the batch share the same id.

    Attributes:
        first_line: Line on which the id was first seen
    """

    first_line: Optional[int] = None


@dataclass
class InvalidFieldError(InputError):
    """A numeric or timestamp field failed to parse or is out of range.

    Attributes:
        field_name: CSV column name
        value: Raw value found in the row
    """

    field_name: str = ""
    value: str = ""


@dataclass
class InvalidModeError(InputError):
    """Unrecognised mode of transport."""

    value: str = ""


@dataclass
class InvalidAvoidanceError(InputError):
    """Unrecognised avoidance token."""

    value: str = ""


@dataclass
class InvalidTrafficModelError(InputError):
    """Traffic model missing for driving, present otherwise, or unknown."""

    value: str = ""


# ---------------------------------------------------------------------------
# Transport / output
# ---------------------------------------------------------------------------


@dataclass
class TransportError(TelestoError):
    """A single directions call failed.

    Attributes:
        url: URL that was requested
        status_code: HTTP status when a response was received
        timed_out: Whether the failure was a timeout
    """

    url: str = ""
    status_code: Optional[int] = None
    timed_out: bool = False


@dataclass
class AggregationError(TelestoError):
    """Outcomes do not line up one-to-one with the input ids."""


@dataclass
class OutputError(TelestoError):
    """The result could not be written.

    Attributes:
        path: Output path, None for standard output
    """

    path: Optional[str] = None
