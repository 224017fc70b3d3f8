"""
Domain validation, normalization and splitting.

Domains are lower-cased, IDNA-encoded when they contain non-ASCII characters,
and split at the first dot into a second-level label and a TLD with its
leading dot ("example.co.uk" -> "example", ".co.uk").
"""

import re
from dataclasses import dataclass
from typing import Optional

import idna

from whois_checker.enums import DomainValidationErrorCode
from whois_checker.exceptions import ValidationError
from whois_checker.models import DomainParts


# Forbidden characters in domain names (control chars, spaces, special symbols)
# Based on RFC 1035 and RFC 5891 (IDNA2008)
FORBIDDEN_CHARS_PATTERN = re.compile(
    r'[\x00-\x1f\x7f'           # Control characters
    r'\s'                        # Whitespace
    r'!@#$%^&*()+=\[\]{}|\\:;"\'<>,?/`~]'  # Special symbols not allowed
)


@dataclass
class DomainValidationError:
    """Structured error information for domain validation failures."""

    code: DomainValidationErrorCode
    message: str
    details: dict


@dataclass
class DomainValidationResult:
    """Result of domain validation operation."""

    valid: bool
    parts: Optional[DomainParts]
    error: Optional[DomainValidationError]


class DomainValidator:
    """Validates, normalizes and splits domain names."""

    def validate(self, raw_domain: str) -> DomainValidationResult:
        """
        Validate and split a domain string without raising.

        Args:
            raw_domain: The raw domain string to validate

        Returns:
            DomainValidationResult with the split parts or an error
        """
        try:
            parts = self.split(raw_domain)
        except ValidationError as e:
            return DomainValidationResult(
                valid=False,
                parts=None,
                error=DomainValidationError(
                    code=DomainValidationErrorCode(e.code),
                    message=e.message,
                    details=e.details,
                ),
            )
        return DomainValidationResult(valid=True, parts=parts, error=None)

    def split(self, raw_domain: str) -> DomainParts:
        """
        Normalize a domain and split it at the first dot.

        Raises:
            ValidationError: Empty input, forbidden characters or IDNA failure
        """
        if not raw_domain or not raw_domain.strip():
            raise ValidationError(
                code=DomainValidationErrorCode.EMPTY_INPUT.value,
                message="Domain input is empty",
                details={"raw_input": raw_domain},
            )

        domain = raw_domain.strip().rstrip(".")

        forbidden = FORBIDDEN_CHARS_PATTERN.findall(domain)
        if forbidden:
            raise ValidationError(
                code=DomainValidationErrorCode.FORBIDDEN_CHARS.value,
                message="Domain contains forbidden characters",
                details={"raw_input": raw_domain, "forbidden_chars": forbidden},
            )

        canonical = self.normalize_to_canonical(domain)

        sld, dot, rest = canonical.partition(".")
        if not sld:
            raise ValidationError(
                code=DomainValidationErrorCode.EMPTY_INPUT.value,
                message="Domain has no second-level label",
                details={"raw_input": raw_domain},
            )
        return DomainParts(sld=sld, tld=f".{rest}" if dot and rest else None)

    def normalize_to_canonical(self, domain: str) -> str:
        """
        Convert domain to canonical form (lowercase, IDNA-encoded).

        Raises:
            ValidationError: If IDNA encoding fails
        """
        domain_lower = domain.lower()

        if all(ord(c) < 128 for c in domain_lower):
            return domain_lower

        try:
            return idna.encode(domain_lower, uts46=True).decode("ascii")
        except idna.IDNAError as e:
            raise ValidationError(
                code=DomainValidationErrorCode.IDNA_ERROR.value,
                message=f"IDNA encoding failed: {e}",
                details={"domain": domain, "idna_error": str(e)},
            )
