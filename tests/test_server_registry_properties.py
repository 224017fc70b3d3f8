"""
Property-based tests for the server registry.

Covers extension expansion, override merging and descriptor construction
from the packaged and temporary definition files.
"""

import json
import string

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from whois_checker.enums import TransportKind
from whois_checker.exceptions import (
    EndpointMissingError,
    RegistryError,
    ServerUnknownError,
)
from whois_checker.server_registry import ServerRegistry, parse_definitions


tld_label = st.text(alphabet=string.ascii_lowercase, min_size=2, max_size=6)


def write_json(path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class TestExtensionExpansionProperty:
    """Every comma-separated extension gets its own key."""

    @given(labels=st.lists(tld_label, min_size=1, max_size=6, unique=True))
    @settings(max_examples=100)
    def test_all_extensions_registered(self, labels: list[str]):
        extensions = ",".join(f".{label}" for label in labels)
        definitions = parse_definitions([
            {"extensions": extensions, "uri": "socket://whois.example", "available": "x"},
        ])
        registry = ServerRegistry(definitions)
        for label in labels:
            assert registry.can_lookup(f".{label}")
            assert registry.can_lookup(label.upper())
            assert registry.get(label).endpoint_uri == "socket://whois.example"
        assert len(registry) == len(labels)

    def test_entry_without_extensions_rejected(self):
        with pytest.raises(RegistryError) as exc_info:
            parse_definitions([{"uri": "socket://whois.example"}])
        assert exc_info.value.code == "invalid_entry"


class TestDescriptorProperty:
    """Descriptors reflect the entry's URI scheme and match strings."""

    def setup_method(self):
        self.registry = ServerRegistry(parse_definitions([
            {"extensions": ".com,.net", "uri": "socket://whois.verisign-grs.com",
             "available": "No match for", "premium": ""},
            {"extensions": ".test", "uri": "socket://whois.example.test:4343",
             "available": "free", "premium": "premium name"},
            {"extensions": ".ch", "uri": "https://rdap.nic.ch/domain/", "available": "---404"},
            {"extensions": ".tk", "uri": "", "available": "not known"},
        ]))

    def test_socket_descriptor(self):
        descriptor = self.registry.get(".com")
        assert descriptor.transport == TransportKind.SOCKET
        assert descriptor.host == "whois.verisign-grs.com"
        assert descriptor.port == 43
        assert descriptor.available_match == "No match for"
        assert descriptor.premium_match is None

    def test_socket_descriptor_with_port(self):
        descriptor = self.registry.get("test")
        assert descriptor.host == "whois.example.test"
        assert descriptor.port == 4343
        assert descriptor.premium_match == "premium name"

    def test_http_descriptor(self):
        descriptor = self.registry.get(".ch")
        assert descriptor.transport == TransportKind.HTTP
        assert descriptor.endpoint_uri == "https://rdap.nic.ch/domain/"

    def test_unknown_tld(self):
        with pytest.raises(ServerUnknownError) as exc_info:
            self.registry.get(".zz")
        assert exc_info.value.message == "Whois server not known for .zz"
        assert isinstance(exc_info.value, RegistryError)

    @pytest.mark.parametrize("uri", [
        "socket://whois.example:abc",
        "socket://whois.example:",
        "socket://whois.example:70000",
        "socket://",
    ])
    def test_malformed_socket_address(self, uri: str):
        registry = ServerRegistry(parse_definitions([
            {"extensions": ".bad", "uri": uri, "available": "x"},
        ]))
        with pytest.raises(RegistryError) as exc_info:
            registry.get(".bad")
        assert exc_info.value.code == "invalid_endpoint"
        assert exc_info.value.details["uri"] == uri

    def test_empty_uri(self):
        with pytest.raises(EndpointMissingError) as exc_info:
            self.registry.get(".tk")
        assert exc_info.value.message == "Uri not defined for whois service"
        assert ".tk" in self.registry


class TestFileLoadingProperty:
    """Base file is required; the override file wins per TLD."""

    def test_override_wins(self, tmp_path):
        base = tmp_path / "dist.whois.json"
        override = tmp_path / "whois.json"
        write_json(base, [
            {"extensions": ".com,.net", "uri": "socket://whois.verisign-grs.com",
             "available": "No match for"},
        ])
        write_json(override, [
            {"extensions": ".com", "uri": "socket://whois.local", "available": "Not here"},
        ])

        registry = ServerRegistry.load(base, override)
        assert registry.get(".com").endpoint_uri == "socket://whois.local"
        assert registry.get(".com").available_match == "Not here"
        assert registry.get(".net").endpoint_uri == "socket://whois.verisign-grs.com"

    def test_missing_override_ignored(self, tmp_path):
        base = tmp_path / "dist.whois.json"
        write_json(base, [{"extensions": ".org", "uri": "socket://w.org", "available": "x"}])
        registry = ServerRegistry.load(base, tmp_path / "absent.json")
        assert registry.tlds() == [".org"]

    def test_missing_base_file(self, tmp_path):
        with pytest.raises(RegistryError) as exc_info:
            ServerRegistry.load(tmp_path / "dist.whois.json")
        assert exc_info.value.code == "file_unreadable"
        assert exc_info.value.message == "dist.whois.json file not found!"

    def test_malformed_base_file(self, tmp_path):
        base = tmp_path / "dist.whois.json"
        base.write_text("{not json", encoding="utf-8")
        with pytest.raises(RegistryError) as exc_info:
            ServerRegistry.load(base, tmp_path / "absent.json")
        assert exc_info.value.code == "invalid_json"

    def test_packaged_definitions(self, tmp_path):
        registry = ServerRegistry.load(override_path=tmp_path / "absent.json")
        for tld in (".com", ".net", ".org", ".info", ".de", ".ch"):
            assert tld in registry
        assert registry.get(".de").available_match == "Status: free"
        assert registry.get(".ch").transport == TransportKind.HTTP
        with pytest.raises(EndpointMissingError):
            registry.get(".tk")
