"""
Enumeration types for the WHOIS checker.

These enums provide type-safe constants for verdicts, transports, error
kinds and configuration options throughout the system.
"""

from enum import Enum


class Verdict(Enum):
    """Per-domain lookup result exposed to callers."""

    AVAILABLE = "available"
    PREMIUM = "premium"
    UNAVAILABLE = "unavailable"
    ERROR = "error"
    INVALID = "invalid"


class TransportKind(Enum):
    """How a registry endpoint is queried."""

    SOCKET = "socket"
    HTTP = "http"


class TransportErrorKind(Enum):
    """Error kinds raised by the protocol client."""

    CONNECTION_FAILURE = "connection_failure"
    TRANSFER_FAILURE = "transfer_failure"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class DomainValidationErrorCode(Enum):
    """Error codes for domain validation failures."""

    FORBIDDEN_CHARS = "forbidden_chars"
    IDNA_ERROR = "idna_error"
    EMPTY_INPUT = "empty_input"
