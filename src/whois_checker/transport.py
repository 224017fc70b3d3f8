"""
Protocol client for WHOIS lookups.

Registries are queried either over a raw WHOIS socket (port 43 unless the
registry URI says otherwise) or with an HTTP GET against a WHOIS-like web or
RDAP endpoint. Each lookup is exactly one round trip with no retry; failures
are raised as TransportError subclasses for the orchestrator to report.
"""

import socket
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from .config import TransportConfig
from .enums import TransportKind
from .exceptions import ConnectionFailureError, TransferFailureError
from .models import RESPONSE_SENTINEL, RawResponse, ServerDescriptor

RECV_CHUNK_SIZE = 4096


class Transport(ABC):
    """One way of fetching a raw response from a registry endpoint."""

    kind: TransportKind

    @abstractmethod
    def fetch(self, descriptor: ServerDescriptor, domain: str) -> RawResponse:
        """
        Perform a single lookup.

        Raises:
            TransportError: If the round trip fails
        """

    def close(self) -> None:
        """Release any held resources."""


class SocketTransport(Transport):
    """Plain-text WHOIS over TCP."""

    kind = TransportKind.SOCKET

    def __init__(
        self,
        connect_timeout: float = 10.0,
        read_timeout: float = 10.0,
    ) -> None:
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout

    def fetch(self, descriptor: ServerDescriptor, domain: str) -> RawResponse:
        host, port = descriptor.host, descriptor.port
        try:
            sock = socket.create_connection((host, port), timeout=self._connect_timeout)
        except OSError as e:
            raise ConnectionFailureError(
                message=f"Error: {getattr(e, 'errno', None) or 0} - {e}",
                details={"host": host, "port": port},
            ) from e

        with sock:
            try:
                sock.sendall(f"{domain}\r\n".encode("utf-8"))
                sock.settimeout(self._read_timeout)
                data = self._read_all(sock)
            except OSError as e:
                raise ConnectionFailureError(
                    message=f"Error: {getattr(e, 'errno', None) or 0} - {e}",
                    details={"host": host, "port": port},
                ) from e

        return RawResponse(
            text=data.decode("utf-8", errors="replace"),
            transport=self.kind,
        )

    def _read_all(self, sock: socket.socket) -> bytes:
        """Read until the server closes the connection."""
        parts: list[bytes] = []
        while True:
            try:
                chunk = sock.recv(RECV_CHUNK_SIZE)
            except socket.timeout:
                # Some servers never close; keep what already arrived
                if parts:
                    break
                raise
            if not chunk:
                break
            parts.append(chunk)
        return b"".join(parts)


class HttpTransport(Transport):
    """WHOIS-like lookup via HTTP GET of endpoint URI + domain."""

    kind = TransportKind.HTTP

    def __init__(
        self,
        timeout: float = 60.0,
        verify_tls: bool = True,
        follow_redirects: bool = False,
        user_agent: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._timeout = timeout
        self._verify_tls = verify_tls
        self._follow_redirects = follow_redirects
        self._user_agent = user_agent
        self._client = client

    def __enter__(self) -> "HttpTransport":
        self._ensure_client()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            headers = {"User-Agent": self._user_agent} if self._user_agent else None
            self._client = httpx.Client(
                verify=self._verify_tls,
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=self._follow_redirects,
                headers=headers,
            )
        return self._client

    def fetch(self, descriptor: ServerDescriptor, domain: str) -> RawResponse:
        url = f"{descriptor.endpoint_uri}{domain}"
        client = self._ensure_client()
        try:
            response = client.get(url, follow_redirects=self._follow_redirects)
        except httpx.HTTPError as e:
            raise TransferFailureError(
                message=f"Error: {type(e).__name__} - {e}",
                details={"url": url},
            ) from e

        # Status codes are not interpreted; a 404 body is response text too
        return RawResponse(text=response.text, transport=self.kind)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


class ProtocolClient:
    """
    Fetches raw responses, choosing the transport by descriptor kind.

    Every returned response starts with the " ---" sentinel; several
    classifier patterns are anchored on it.
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        transports: Optional[dict[TransportKind, Transport]] = None,
    ) -> None:
        config = config or TransportConfig()
        if transports is None:
            transports = {
                TransportKind.SOCKET: SocketTransport(
                    connect_timeout=config.socket_connect_timeout,
                    read_timeout=config.socket_read_timeout,
                ),
                TransportKind.HTTP: HttpTransport(
                    timeout=config.http_timeout,
                    verify_tls=config.verify_tls,
                    follow_redirects=config.follow_redirects,
                    user_agent=config.user_agent,
                ),
            }
        self._transports = transports

    def __enter__(self) -> "ProtocolClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def fetch(self, domain: str, descriptor: ServerDescriptor) -> RawResponse:
        """
        Query the descriptor's endpoint for a domain.

        Raises:
            ConnectionFailureError: Socket lookup failed
            TransferFailureError: HTTP lookup failed
            KeyError: No transport registered for the descriptor's kind
        """
        transport = self._transports[descriptor.transport]
        raw = transport.fetch(descriptor, domain)
        return RawResponse(text=RESPONSE_SENTINEL + raw.text, transport=raw.transport)

    def close(self) -> None:
        for transport in self._transports.values():
            transport.close()
