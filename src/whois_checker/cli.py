"""
Command-line interface for the WHOIS checker.

Commands:
- check: Look up one or more domains (names without TLD use the popular TLDs)
- explain: Show which classifier rules fired for a domain
- config: Configuration management
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from . import __version__
from .audit_logger import AuditLogger
from .config import (
    SystemConfig,
    apply_env_overrides,
    load_config_from_file,
    save_config_to_file,
)
from .enums import Verdict
from .exceptions import ConfigError, RegistryError, ValidationError
from .orchestrator import CheckOrchestrator

DEFAULT_CONFIG_PATH = Path.home() / ".whois_checker" / "config.json"

VERDICT_SYMBOLS = {
    Verdict.AVAILABLE: "✓",
    Verdict.PREMIUM: "$",
    Verdict.UNAVAILABLE: "✗",
    Verdict.ERROR: "!",
    Verdict.INVALID: "?",
}


def build_config(args: argparse.Namespace) -> SystemConfig:
    """
    Load configuration from --config (if given), then apply env and flags.

    Raises:
        ConfigError: If the config file is given but missing or malformed
    """
    config = SystemConfig()
    if getattr(args, "config", None):
        loaded = load_config_from_file(Path(args.config))
        if loaded is None:
            raise ConfigError(
                code="not_found",
                message=f"Could not load config from {args.config}",
            )
        config = loaded

    config = apply_env_overrides(config)

    if getattr(args, "insecure", False):
        config = replace(config, transport=replace(config.transport, verify_tls=False))
    if getattr(args, "override", None):
        config = replace(
            config, registry=replace(config.registry, override_path=Path(args.override))
        )
    return config


def build_logger(config: SystemConfig, verbose: bool) -> AuditLogger:
    try:
        return AuditLogger.from_names(
            level="debug" if verbose else config.logging.level,
            output_format=config.logging.output_format,
        )
    except ValueError as e:
        raise ConfigError(code="invalid_logging", message=str(e)) from e


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the 'check' command."""
    config = build_config(args)
    logger = build_logger(config, args.verbose)

    with CheckOrchestrator(config=config, logger=logger) as orchestrator:
        results = orchestrator.check_results(args.domains, popular_tlds=args.tld)

    if args.json:
        print(json.dumps(
            [
                {
                    "domain": r.domain,
                    "status": r.verdict.value,
                    "error": r.error_detail,
                    "duration_ms": round(r.response_time_ms, 1),
                }
                for r in results
            ],
            indent=2,
            ensure_ascii=False,
        ))
    else:
        for r in results:
            line = f"{VERDICT_SYMBOLS[r.verdict]} {r.domain}: {r.verdict.value}"
            if r.error_detail:
                line += f" ({r.error_detail})"
            print(line)

    available = sum(1 for r in results if r.verdict == Verdict.AVAILABLE)
    if len(results) > 1 and not args.json:
        print(f"\nSummary: {available}/{len(results)} domain(s) available")

    return 0 if available > 0 else 1


def cmd_explain(args: argparse.Namespace) -> int:
    """Handle the 'explain' command."""
    config = build_config(args)
    logger = build_logger(config, args.verbose)

    with CheckOrchestrator(config=config, logger=logger) as orchestrator:
        report = orchestrator.inspect(args.domain)

    details = report.explain().to_dict()
    details["verdict"] = report.result.verdict.value
    details["is_valid"] = report.is_valid
    if report.result.error_detail:
        details["error_message"] = report.result.error_detail

    if args.json:
        print(json.dumps(details, indent=2, ensure_ascii=False))
    else:
        print(f"{report.result.domain}: {report.result.verdict.value}")
        for key, value in details.items():
            if key in ("verdict", "whois_message_preview"):
                continue
            print(f"  {key}: {value}")
        print(f"  preview: {details['whois_message_preview']!r}")

    return 0 if report.is_available() else 1


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    config_path = Path(args.path) if args.path else DEFAULT_CONFIG_PATH

    if args.action == "show":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"No configuration found at: {config_path}")
            print("Use 'config init' to create a default configuration.")
            return 1

        print(f"Configuration from: {config_path}")
        print(f"  Popular TLDs: {', '.join(config.popular_tlds)}")
        print(f"  Socket timeouts: {config.transport.socket_connect_timeout}s connect, "
              f"{config.transport.socket_read_timeout}s read")
        print(f"  HTTP timeout: {config.transport.http_timeout}s")
        print(f"  Verify TLS: {config.transport.verify_tls}")
        print(f"  Registry override: {config.registry.override_path or '(none)'}")
        print(f"  Log level: {config.logging.level}")
        return 0

    elif args.action == "init":
        if config_path.exists() and not args.force:
            print(f"Configuration already exists at: {config_path}")
            print("Use --force to overwrite.")
            return 1

        save_config_to_file(SystemConfig(), config_path)
        print(f"Configuration created at: {config_path}")
        return 0

    elif args.action == "validate":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"Error: Could not load config from {config_path}", file=sys.stderr)
            return 1

        print(f"Configuration at {config_path} is valid.")
        return 0

    return 1


def _add_lookup_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--override",
        help="Registry override file merged over the packaged definitions",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Do not verify TLS certificates of HTTP registry endpoints",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="whois-checker",
        description="WHOIS-based domain availability checker",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'check' command
    check_parser = subparsers.add_parser(
        "check",
        help="Check one or more domains for availability",
    )
    check_parser.add_argument(
        "domains",
        nargs="+",
        help="Domains to check (e.g., example.com, or just 'example')",
    )
    check_parser.add_argument(
        "--tld", "-t",
        action="append",
        help="TLD to try for names without one (repeatable)",
    )
    _add_lookup_options(check_parser)
    check_parser.set_defaults(func=cmd_check)

    # 'explain' command
    explain_parser = subparsers.add_parser(
        "explain",
        help="Show which availability rules fired for a domain",
    )
    explain_parser.add_argument(
        "domain",
        help="Domain to look up (e.g., example.com)",
    )
    _add_lookup_options(explain_parser)
    explain_parser.set_defaults(func=cmd_explain)

    # 'config' command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
    )
    config_parser.add_argument(
        "action",
        choices=["show", "init", "validate"],
        help="Configuration action",
    )
    config_parser.add_argument(
        "--path", "-p",
        help="Path to configuration file",
    )
    config_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force overwrite existing configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except (ConfigError, RegistryError, ValidationError) as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
