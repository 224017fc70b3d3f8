"""
Exception classes for the WHOIS checker.

All exceptions inherit from WhoisCheckerError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional

from .enums import TransportErrorKind


class WhoisCheckerError(Exception):
    """Base exception for all WHOIS checker errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(WhoisCheckerError):
    """Raised when a domain string cannot be normalized or split."""

    pass


class ConfigError(WhoisCheckerError):
    """Raised when a configuration file cannot be read or is malformed."""

    pass


class RegistryError(WhoisCheckerError):
    """Raised when the server registry cannot be loaded or queried."""

    pass


class ServerUnknownError(RegistryError):
    """Raised when a TLD has no entry in the server registry."""

    def __init__(self, tld: str) -> None:
        super().__init__(
            code="server_unknown",
            message=f"Whois server not known for {tld}",
            details={"tld": tld},
        )
        self.tld = tld


class EndpointMissingError(RegistryError):
    """Raised when a registry entry exists but its URI is empty."""

    def __init__(self, tld: str) -> None:
        super().__init__(
            code="endpoint_missing",
            message="Uri not defined for whois service",
            details={"tld": tld},
        )
        self.tld = tld


class TransportError(WhoisCheckerError):
    """Raised when a single network round trip fails."""

    def __init__(
        self,
        kind: TransportErrorKind,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        super().__init__(code=kind.value, message=message, details=details)
        self.kind = kind


class ConnectionFailureError(TransportError):
    """Socket dial, write or read failure."""

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(TransportErrorKind.CONNECTION_FAILURE, message, details)


class TransferFailureError(TransportError):
    """HTTP transfer failure."""

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(TransportErrorKind.TRANSFER_FAILURE, message, details)
