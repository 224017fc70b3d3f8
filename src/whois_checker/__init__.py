"""
WHOIS Checker - WHOIS-based domain availability checker.

This package looks up domains against their registry's WHOIS service (raw
socket or HTTP), applies the registry's match strings and refines the result
with a rule-based response classifier that can explain its verdicts.
"""

__version__ = "0.1.0"
__author__ = "WHOIS Checker Team"

from whois_checker.exceptions import (
    WhoisCheckerError,
    ValidationError,
    ConfigError,
    RegistryError,
    ServerUnknownError,
    EndpointMissingError,
    TransportError,
    ConnectionFailureError,
    TransferFailureError,
)
from whois_checker.enums import (
    Verdict,
    TransportKind,
    TransportErrorKind,
    LogLevel,
    DomainValidationErrorCode,
)
from whois_checker.models import (
    ServerDescriptor,
    RawResponse,
    BaseClassification,
    ClassificationEvidence,
    DomainParts,
    LookupResult,
)
from whois_checker.config import (
    TransportConfig,
    RegistryConfig,
    ClassifierConfig,
    LoggingConfig,
    SystemConfig,
    load_config_from_file,
    save_config_to_file,
    apply_env_overrides,
)
from whois_checker.domain_validator import (
    DomainValidator,
    DomainValidationResult,
    DomainValidationError,
)
from whois_checker.server_registry import ServerRegistry
from whois_checker.transport import (
    Transport,
    SocketTransport,
    HttpTransport,
    ProtocolClient,
)
from whois_checker.base_classifier import classify as base_classify
from whois_checker.response_classifier import (
    RuleSet,
    build_rule_set,
    is_available,
    explain,
)
from whois_checker.audit_logger import (
    AuditLogger,
    LogEntry,
)
from whois_checker.orchestrator import (
    CheckOrchestrator,
    DomainReport,
)
from whois_checker.cli import (
    main as cli_main,
    create_parser,
)

__all__ = [
    # Exceptions
    "WhoisCheckerError",
    "ValidationError",
    "ConfigError",
    "RegistryError",
    "ServerUnknownError",
    "EndpointMissingError",
    "TransportError",
    "ConnectionFailureError",
    "TransferFailureError",
    # Enums
    "Verdict",
    "TransportKind",
    "TransportErrorKind",
    "LogLevel",
    "DomainValidationErrorCode",
    # Models
    "ServerDescriptor",
    "RawResponse",
    "BaseClassification",
    "ClassificationEvidence",
    "DomainParts",
    "LookupResult",
    # Configuration
    "TransportConfig",
    "RegistryConfig",
    "ClassifierConfig",
    "LoggingConfig",
    "SystemConfig",
    "load_config_from_file",
    "save_config_to_file",
    "apply_env_overrides",
    # Domain Validator
    "DomainValidator",
    "DomainValidationResult",
    "DomainValidationError",
    # Registry
    "ServerRegistry",
    # Transport
    "Transport",
    "SocketTransport",
    "HttpTransport",
    "ProtocolClient",
    # Classifiers
    "base_classify",
    "RuleSet",
    "build_rule_set",
    "is_available",
    "explain",
    # Audit Logger
    "AuditLogger",
    "LogEntry",
    # Orchestrator
    "CheckOrchestrator",
    "DomainReport",
    # CLI
    "cli_main",
    "create_parser",
]
