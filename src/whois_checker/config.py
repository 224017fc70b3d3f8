"""
Configuration dataclasses for the WHOIS checker.

This module defines the configuration structures used throughout the system:
transport timeouts and TLS policy, server registry locations, extra classifier
patterns, logging, and the popular TLD list used when a domain has no TLD.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import ConfigError

DEFAULT_POPULAR_TLDS = [".com", ".net", ".org", ".info"]

ENV_PREFIX = "WHOIS_CHECKER_"


@dataclass
class TransportConfig:
    """Timeouts and HTTP policy for the protocol client."""

    socket_connect_timeout: float = 10.0
    socket_read_timeout: float = 10.0
    http_timeout: float = 60.0
    # Some registry HTTP endpoints use self-signed certificates
    verify_tls: bool = True
    follow_redirects: bool = False
    user_agent: str = "whois-checker/0.1"


@dataclass
class RegistryConfig:
    """Locations of the server registry files."""

    base_path: Optional[Path] = None  # None means the packaged dist.whois.json
    override_path: Optional[Path] = None


@dataclass
class ClassifierConfig:
    """Extra TLD patterns merged over the built-in classifier tables."""

    availability_patterns: dict[str, list[str]] = field(default_factory=dict)
    unavailability_patterns: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "warn"
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass
class SystemConfig:
    """Main system configuration combining all sub-configurations."""

    transport: TransportConfig = field(default_factory=TransportConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    popular_tlds: list[str] = field(
        default_factory=lambda: list(DEFAULT_POPULAR_TLDS)
    )


def normalize_tld(tld: str) -> str:
    """Lower-case a TLD and make sure it has a leading dot."""
    tld = tld.strip().lower()
    if not tld.startswith("."):
        tld = "." + tld
    return tld


TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def parse_bool(value) -> bool:
    """
    Interpret a JSON boolean or a yes/no style string.

    Raises:
        ValueError: If the value is neither
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    raise ValueError(f"Not a boolean: {value!r}")


def config_from_dict(data: dict) -> SystemConfig:
    """
    Build a SystemConfig from a parsed JSON document.

    Missing sections fall back to their defaults.

    Raises:
        ConfigError: If a section has the wrong shape
    """
    try:
        transport_data = data.get("transport", {})
        defaults = TransportConfig()
        transport = TransportConfig(
            socket_connect_timeout=float(transport_data.get(
                "socket_connect_timeout", defaults.socket_connect_timeout)),
            socket_read_timeout=float(transport_data.get(
                "socket_read_timeout", defaults.socket_read_timeout)),
            http_timeout=float(transport_data.get("http_timeout", defaults.http_timeout)),
            verify_tls=parse_bool(transport_data.get("verify_tls", defaults.verify_tls)),
            follow_redirects=parse_bool(transport_data.get(
                "follow_redirects", defaults.follow_redirects)),
            user_agent=transport_data.get("user_agent", defaults.user_agent),
        )

        registry_data = data.get("registry", {})
        base_path = registry_data.get("base_path")
        override_path = registry_data.get("override_path")
        registry = RegistryConfig(
            base_path=Path(base_path) if base_path else None,
            override_path=Path(override_path) if override_path else None,
        )

        classifier_data = data.get("classifier", {})
        classifier = ClassifierConfig(
            availability_patterns={
                normalize_tld(tld): list(patterns)
                for tld, patterns in classifier_data.get("availability_patterns", {}).items()
            },
            unavailability_patterns={
                normalize_tld(tld): list(patterns)
                for tld, patterns in classifier_data.get("unavailability_patterns", {}).items()
            },
        )

        logging_data = data.get("logging", {})
        logging_config = LoggingConfig(
            level=logging_data.get("level", "warn"),
            output_format=logging_data.get("output_format", "text"),
        )

        popular = data.get("popular_tlds") or DEFAULT_POPULAR_TLDS

        return SystemConfig(
            transport=transport,
            registry=registry,
            classifier=classifier,
            logging=logging_config,
            popular_tlds=[normalize_tld(tld) for tld in popular],
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigError(
            code="invalid_config",
            message=f"Invalid configuration: {e}",
        ) from e


def config_to_dict(config: SystemConfig) -> dict:
    """Serialize a SystemConfig to a JSON-compatible dictionary."""
    return {
        "transport": {
            "socket_connect_timeout": config.transport.socket_connect_timeout,
            "socket_read_timeout": config.transport.socket_read_timeout,
            "http_timeout": config.transport.http_timeout,
            "verify_tls": config.transport.verify_tls,
            "follow_redirects": config.transport.follow_redirects,
            "user_agent": config.transport.user_agent,
        },
        "registry": {
            "base_path": str(config.registry.base_path) if config.registry.base_path else None,
            "override_path": (
                str(config.registry.override_path) if config.registry.override_path else None
            ),
        },
        "classifier": {
            "availability_patterns": config.classifier.availability_patterns,
            "unavailability_patterns": config.classifier.unavailability_patterns,
        },
        "logging": {
            "level": config.logging.level,
            "output_format": config.logging.output_format,
        },
        "popular_tlds": config.popular_tlds,
    }


def load_config_from_file(config_path: Path) -> Optional[SystemConfig]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        SystemConfig if the file exists, None otherwise

    Raises:
        ConfigError: If the file is not valid JSON or has the wrong shape
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except json.JSONDecodeError as e:
        raise ConfigError(
            code="invalid_json",
            message=f"Error loading config: {e}",
            details={"path": str(config_path)},
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(
            code="invalid_config",
            message="Configuration root must be a JSON object",
            details={"path": str(config_path)},
        )
    return config_from_dict(data)


def save_config_to_file(config: SystemConfig, config_path: Path) -> None:
    """
    Save configuration to a JSON file.

    Raises:
        ConfigError: If the file cannot be written
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config_to_dict(config), f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise ConfigError(
            code="write_failed",
            message=f"Error saving config: {e}",
            details={"path": str(config_path)},
        ) from e


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    try:
        return float(env.get(ENV_PREFIX + name, default))
    except (TypeError, ValueError):
        return default


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(ENV_PREFIX + name)
    if value is None:
        return default
    try:
        return parse_bool(value)
    except ValueError:
        return default


def apply_env_overrides(
    config: SystemConfig,
    env: Optional[Mapping[str, str]] = None,
) -> SystemConfig:
    """
    Apply WHOIS_CHECKER_* environment variables on top of a configuration.

    Recognised variables: SOCKET_CONNECT_TIMEOUT, SOCKET_READ_TIMEOUT,
    HTTP_TIMEOUT, VERIFY_TLS, OVERRIDE_FILE, POPULAR_TLDS (comma separated),
    LOG_LEVEL, LOG_FORMAT.
    """
    if env is None:
        env = os.environ

    transport = TransportConfig(
        socket_connect_timeout=_env_float(
            env, "SOCKET_CONNECT_TIMEOUT", config.transport.socket_connect_timeout),
        socket_read_timeout=_env_float(
            env, "SOCKET_READ_TIMEOUT", config.transport.socket_read_timeout),
        http_timeout=_env_float(env, "HTTP_TIMEOUT", config.transport.http_timeout),
        verify_tls=_env_bool(env, "VERIFY_TLS", config.transport.verify_tls),
        follow_redirects=config.transport.follow_redirects,
        user_agent=config.transport.user_agent,
    )

    override = env.get(ENV_PREFIX + "OVERRIDE_FILE")
    registry = RegistryConfig(
        base_path=config.registry.base_path,
        override_path=Path(override) if override else config.registry.override_path,
    )

    popular_raw = env.get(ENV_PREFIX + "POPULAR_TLDS", "")
    popular = [normalize_tld(t) for t in popular_raw.split(",") if t.strip()]

    logging_config = LoggingConfig(
        level=env.get(ENV_PREFIX + "LOG_LEVEL", config.logging.level),
        output_format=env.get(ENV_PREFIX + "LOG_FORMAT", config.logging.output_format),
    )

    return SystemConfig(
        transport=transport,
        registry=registry,
        classifier=config.classifier,
        logging=logging_config,
        popular_tlds=popular or list(config.popular_tlds),
    )
