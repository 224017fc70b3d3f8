"""
Data models for the WHOIS checker.

This module defines the request-scoped value objects passed between the
registry, the protocol client and the classifiers. Only LookupResult is
mutable.
"""

from dataclasses import asdict, dataclass
from typing import Optional

from .enums import TransportKind, Verdict

SOCKET_PREFIX = "socket://"
DEFAULT_WHOIS_PORT = 43

# Prepended to every raw response before matching
RESPONSE_SENTINEL = " ---"


@dataclass(frozen=True)
class ServerDescriptor:
    """Registry endpoint for one TLD."""

    tld: str
    endpoint_uri: str
    transport: TransportKind
    available_match: str
    premium_match: Optional[str] = None

    @property
    def host(self) -> str:
        """Host part of a socket:// URI (the bare URI for HTTP endpoints)."""
        return self._split_address()[0]

    @property
    def port(self) -> int:
        """Port of a socket:// URI, 43 unless given as host:port."""
        return self._split_address()[1]

    def _split_address(self) -> tuple[str, int]:
        address = self.endpoint_uri
        if address.startswith(SOCKET_PREFIX):
            address = address[len(SOCKET_PREFIX):]
        if self.transport == TransportKind.SOCKET and ":" in address[1:]:
            host, port = address.split(":", 1)
            return host, int(port)
        return address, DEFAULT_WHOIS_PORT


@dataclass(frozen=True)
class RawResponse:
    """Raw response text of a single lookup, sentinel already prepended."""

    text: str
    transport: TransportKind


@dataclass(frozen=True)
class BaseClassification:
    """First-pass verdict from the registry's own match strings."""

    verdict: Verdict
    evidence_text: Optional[str] = None


@dataclass(frozen=True)
class ClassificationEvidence:
    """
    Result of every classifier rule, evaluated without short-circuiting.

    final_availability is what is_available() returns for the same input.
    """

    original_library_result: bool
    contains_unavailability_indicators: bool
    contains_registration_indicators: bool
    contains_availability_keywords: bool
    contains_no_match_patterns: bool
    tld_specific_patterns: bool
    is_response_too_short: bool
    domain_status_indicators: bool
    final_availability: bool
    whois_message_length: int
    whois_message_preview: str

    def to_dict(self) -> dict:
        """Convert evidence to a plain dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class DomainParts:
    """A domain split at its first dot."""

    sld: str
    tld: Optional[str]  # with leading dot, None when the input has no dot

    @property
    def domain(self) -> str:
        return f"{self.sld}{self.tld or ''}"


@dataclass
class LookupResult:
    """Outcome of one (sld, tld) lookup."""

    domain: str
    sld: str
    tld: str
    verdict: Verdict
    whois_message: str
    error_detail: Optional[str] = None
    base_available: bool = False
    response_time_ms: float = 0.0
