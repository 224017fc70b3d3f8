"""
Check Orchestrator for the WHOIS checker.

This module coordinates the components of a lookup:
- Domain normalization and splitting
- Server registry lookup (unknown TLD -> invalid)
- One protocol round trip (transport failure -> error)
- Base classification with the registry's match strings
- Response classification of unavailable base verdicts

Batches are processed sequentially and one failing lookup never aborts
its siblings.
"""

import time
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from . import base_classifier, response_classifier
from .audit_logger import AuditLogger
from .config import SystemConfig, normalize_tld
from .domain_validator import DomainValidator
from .enums import LogLevel, Verdict
from .exceptions import RegistryError, TransportError, ValidationError
from .models import ClassificationEvidence, DomainParts, LookupResult
from .response_classifier import RuleSet
from .server_registry import ServerRegistry
from .transport import ProtocolClient


@dataclass
class DomainReport:
    """Lookup result of one domain together with its classification details."""

    result: LookupResult
    rules: RuleSet = response_classifier.DEFAULT_RULES

    @property
    def sld(self) -> str:
        return self.result.sld

    @property
    def tld(self) -> str:
        return self.result.tld

    @property
    def whois_message(self) -> str:
        return self.result.whois_message

    @property
    def is_valid(self) -> bool:
        """False when the TLD is unknown or the lookup failed."""
        return self.result.verdict not in (Verdict.INVALID, Verdict.ERROR)

    def is_available(self) -> bool:
        if not self.is_valid:
            return False
        return response_classifier.is_available(
            self.whois_message, self.tld, self.result.base_available, self.rules
        )

    def explain(self) -> ClassificationEvidence:
        """Rule breakdown of the whois message; never available for failed lookups."""
        evidence = response_classifier.explain(
            self.whois_message, self.tld, self.result.base_available, self.rules
        )
        if not self.is_valid:
            evidence = replace(evidence, final_availability=False)
        return evidence


class CheckOrchestrator:
    """
    Main orchestrator for WHOIS availability checks.

    Registry misses are reported as INVALID and transport failures as ERROR
    with a detail message; the classifiers only ever see fetched responses.
    """

    def __init__(
        self,
        config: Optional[SystemConfig] = None,
        registry: Optional[ServerRegistry] = None,
        client: Optional[ProtocolClient] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the check orchestrator.

        Args:
            config: System configuration (defaults apply when omitted)
            registry: Server registry; loaded from config.registry when omitted
            client: Protocol client; built from config.transport when omitted
            logger: Optional audit logger
        """
        self._config = config or SystemConfig()
        self._registry = registry or ServerRegistry.from_config(self._config.registry)
        self._client = client or ProtocolClient(self._config.transport)
        self._rules = response_classifier.build_rule_set(self._config.classifier)
        self._validator = DomainValidator()
        self._logger = logger

    def __enter__(self) -> "CheckOrchestrator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def lookup(self, sld: str, tld: str) -> LookupResult:
        """
        Look up a single (sld, tld) pair.

        Args:
            sld: Second-level label, e.g. 'example'
            tld: TLD with or without leading dot, e.g. '.co.uk'

        Returns:
            LookupResult; never raises for registry or transport failures
        """
        start_time = time.perf_counter()
        tld = normalize_tld(tld)
        domain = f"{sld}{tld}"

        try:
            descriptor = self._registry.get(tld)
        except RegistryError as e:
            self._log(LogLevel.WARN, f"No usable registry entry for {tld}",
                      {"domain": domain, "error_code": e.code})
            return LookupResult(
                domain=domain,
                sld=sld,
                tld=tld,
                verdict=Verdict.INVALID,
                whois_message=f"Unable to lookup whois information for {domain}",
                error_detail=e.message,
                response_time_ms=self._elapsed_ms(start_time),
            )

        try:
            raw = self._client.fetch(domain, descriptor)
        except TransportError as e:
            if self._logger:
                self._logger.log_error(
                    "ProtocolClient",
                    f"Lookup failed for {domain}",
                    error=e,
                    request_url=descriptor.endpoint_uri,
                    additional_data={"domain": domain},
                )
            return LookupResult(
                domain=domain,
                sld=sld,
                tld=tld,
                verdict=Verdict.ERROR,
                whois_message=e.message or f"WHOIS lookup error for {domain}",
                error_detail=e.message,
                response_time_ms=self._elapsed_ms(start_time),
            )

        base = base_classifier.classify(raw, descriptor)

        if base.verdict == Verdict.AVAILABLE:
            verdict = Verdict.AVAILABLE
            message = f"{domain} is available for registration."
        elif base.verdict == Verdict.PREMIUM:
            verdict = Verdict.PREMIUM
            message = f"{domain} is available at a premium price."
        else:
            message = base.evidence_text or ""
            available = response_classifier.is_available(message, tld, False, self._rules)
            verdict = Verdict.AVAILABLE if available else Verdict.UNAVAILABLE

        result = LookupResult(
            domain=domain,
            sld=sld,
            tld=tld,
            verdict=verdict,
            whois_message=message,
            base_available=base.verdict == Verdict.AVAILABLE,
            response_time_ms=self._elapsed_ms(start_time),
        )

        self._log(LogLevel.INFO, f"Lookup completed for {domain}: {verdict.value}", {
            "domain": domain,
            "transport": descriptor.transport.value,
            "base_verdict": base.verdict.value,
            "verdict": verdict.value,
            "duration_ms": result.response_time_ms,
        })
        return result

    def check_results(
        self,
        domains: Iterable[str],
        popular_tlds: Optional[list[str]] = None,
    ) -> list[LookupResult]:
        """
        Look up every domain, expanding TLD-less names over the popular TLDs.

        Args:
            domains: Domain strings, with or without TLD
            popular_tlds: TLDs tried for names without one
                (defaults to config.popular_tlds)

        Returns:
            One LookupResult per (sld, tld) pair, in input order
        """
        tlds_to_try = [normalize_tld(t) for t in (popular_tlds or self._config.popular_tlds)]
        results: list[LookupResult] = []

        for raw_domain in domains:
            validation = self._validator.validate(raw_domain)
            if not validation.valid:
                error = validation.error
                self._log(LogLevel.WARN, f"Invalid domain input: {raw_domain!r}",
                          {"error_code": error.code.value, **error.details})
                name = (raw_domain or "").strip()
                results.append(LookupResult(
                    domain=name,
                    sld=name,
                    tld="",
                    verdict=Verdict.INVALID,
                    whois_message=error.message,
                    error_detail=error.message,
                ))
                continue

            parts = validation.parts
            for tld in ([parts.tld] if parts.tld else tlds_to_try):
                results.append(self.lookup(parts.sld, tld))

        return results

    def check(
        self,
        domains: Iterable[str],
        popular_tlds: Optional[list[str]] = None,
    ) -> dict[str, Verdict]:
        """Map each looked-up domain to its verdict."""
        if isinstance(domains, str):
            domains = [domains]
        return {
            result.domain: result.verdict
            for result in self.check_results(domains, popular_tlds)
        }

    def inspect(self, domain: str) -> DomainReport:
        """
        Look up one fully qualified domain and keep its classification details.

        Raises:
            ValidationError: If the domain is malformed or has no TLD
        """
        parts: DomainParts = self._validator.split(domain)
        if parts.tld is None:
            raise ValidationError(
                code="invalid_tld",
                message=f"Domain has no TLD: {domain}",
                details={"raw_input": domain},
            )
        return DomainReport(result=self.lookup(parts.sld, parts.tld), rules=self._rules)

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "CheckOrchestrator", message, data)

    def _elapsed_ms(self, start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000

    @property
    def registry(self) -> ServerRegistry:
        return self._registry

    @property
    def config(self) -> SystemConfig:
        return self._config
