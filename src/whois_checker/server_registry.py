"""
Server registry mapping TLDs to WHOIS endpoints.

Definitions are JSON lists of entries like::

    {"extensions": ".com,.net", "uri": "socket://whois.verisign-grs.com",
     "available": "No match for", "premium": ""}

A comma-separated "extensions" value is expanded into one key per TLD.
The packaged dist.whois.json is loaded first and a local override file, if
present, is merged on top (override wins per TLD).
"""

import json
from pathlib import Path
from typing import Optional, Union

from .config import RegistryConfig, normalize_tld
from .enums import TransportKind
from .exceptions import EndpointMissingError, RegistryError, ServerUnknownError
from .models import SOCKET_PREFIX, ServerDescriptor

DATA_DIR = Path(__file__).resolve().parent / "data"
DIST_FILE = DATA_DIR / "dist.whois.json"
OVERRIDE_FILE = DATA_DIR / "whois.json"

PathLike = Union[str, Path]


def parse_definitions(entries: list) -> dict[str, dict]:
    """
    Expand a list of registry entries into a TLD-keyed mapping.

    Raises:
        RegistryError: If an entry is not an object or lacks "extensions"
    """
    definitions: dict[str, dict] = {}
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict) or "extensions" not in entry:
            raise RegistryError(
                code="invalid_entry",
                message=f"Registry entry {index} has no extensions",
                details={"entry": entry},
            )
        definition = {k: v for k, v in entry.items() if k != "extensions"}
        for extension in str(entry["extensions"]).split(","):
            extension = extension.strip()
            if extension:
                definitions[normalize_tld(extension)] = definition
    return definitions


def load_definitions_file(path: Path) -> dict[str, dict]:
    """
    Read one definitions file.

    Raises:
        RegistryError: If the file cannot be read or parsed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            entries = json.load(f)
    except OSError as e:
        raise RegistryError(
            code="file_unreadable",
            message=f"{path.name} file not found!",
            details={"path": str(path), "error": str(e)},
        ) from e
    except json.JSONDecodeError as e:
        raise RegistryError(
            code="invalid_json",
            message=f"{path.name} is not valid JSON: {e}",
            details={"path": str(path)},
        ) from e

    if not isinstance(entries, list):
        raise RegistryError(
            code="invalid_json",
            message=f"{path.name} must contain a JSON list",
            details={"path": str(path)},
        )
    return parse_definitions(entries)


class ServerRegistry:
    """Read-only TLD -> ServerDescriptor lookup."""

    def __init__(self, definitions: dict[str, dict]) -> None:
        self._definitions = {normalize_tld(k): dict(v) for k, v in definitions.items()}

    @classmethod
    def load(
        cls,
        base_path: Optional[PathLike] = None,
        override_path: Optional[PathLike] = None,
    ) -> "ServerRegistry":
        """
        Load the base definitions and merge an optional override file.

        Args:
            base_path: Base definitions file (defaults to the packaged one)
            override_path: Override file; ignored when it does not exist
                (defaults to whois.json beside the packaged file)

        Raises:
            RegistryError: If the base file is missing or any file is malformed
        """
        base = Path(base_path) if base_path else DIST_FILE
        override = Path(override_path) if override_path else OVERRIDE_FILE

        definitions = load_definitions_file(base)
        if override.exists():
            definitions.update(load_definitions_file(override))
        return cls(definitions)

    @classmethod
    def from_config(cls, config: RegistryConfig) -> "ServerRegistry":
        return cls.load(config.base_path, config.override_path)

    def can_lookup(self, tld: str) -> bool:
        """Check if a TLD has a registry entry."""
        return normalize_tld(tld) in self._definitions

    def get(self, tld: str) -> ServerDescriptor:
        """
        Build the descriptor for a TLD.

        Raises:
            ServerUnknownError: If the TLD has no entry
            EndpointMissingError: If the entry has an empty URI
            RegistryError: If a socket:// URI has no host or a bad port
        """
        key = normalize_tld(tld)
        definition = self._definitions.get(key)
        if definition is None:
            raise ServerUnknownError(key)

        uri = definition.get("uri") or ""
        if not uri:
            raise EndpointMissingError(key)

        transport = (
            TransportKind.SOCKET if uri.startswith(SOCKET_PREFIX) else TransportKind.HTTP
        )
        descriptor = ServerDescriptor(
            tld=key,
            endpoint_uri=uri,
            transport=transport,
            available_match=definition.get("available") or "",
            premium_match=definition.get("premium") or None,
        )
        if transport == TransportKind.SOCKET:
            self._check_socket_address(descriptor)
        return descriptor

    def _check_socket_address(self, descriptor: ServerDescriptor) -> None:
        try:
            port = descriptor.port
        except ValueError:
            port = None
        if not descriptor.host or port is None or not 0 < port < 65536:
            raise RegistryError(
                code="invalid_endpoint",
                message=f"Invalid whois server address: {descriptor.endpoint_uri}",
                details={"tld": descriptor.tld, "uri": descriptor.endpoint_uri},
            )

    def tlds(self) -> list[str]:
        """Return all TLDs with an entry, sorted."""
        return sorted(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, tld: str) -> bool:
        return self.can_lookup(tld)
