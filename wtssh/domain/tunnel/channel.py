"""
WebTunnel channels over WebSocket
"""
import base64
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from websockets.client import ClientProtocol
from websockets.datastructures import Headers
from websockets.exceptions import (
    ConnectionClosed,
    InvalidHandshake,
    InvalidStatus,
    NegotiationError,
    WebSocketException,
)
from websockets.sync.client import ClientConnection, connect

from ...core.constants import (
    WEBTUNNEL_PATH,
    WEBTUNNEL_PROTOCOL,
    WEBTUNNEL_REMOTE_PORT_HEADER,
)
from ...core.exceptions import TunnelOpenError
from ...core.interfaces import ChannelFactory, TunnelChannel
from ...core.logging import get_logger
from .models import TunnelEndpoint

logger = get_logger(__name__)

_SCHEMES = {
    "http": "ws",
    "https": "wss",
    "ws": "ws",
    "wss": "wss",
}


def webtunnel_url(uri: str) -> str:
    """
    Map a device URI to its WebTunnel WebSocket URL.
    
    ``https://<device>.my-devices.net`` becomes
    ``wss://<device>.my-devices.net/webtunnel``.
    
    Raises:
        TunnelOpenError: If the URI has no host or an unsupported scheme
    """
    parts = urlsplit(uri)
    scheme = _SCHEMES.get(parts.scheme.lower())
    if scheme is None or not parts.hostname:
        raise TunnelOpenError(f"Unsupported remote URI: {uri}")
    return urlunsplit((scheme, parts.netloc, WEBTUNNEL_PATH, "", ""))


class WebTunnelClientProtocol(ClientProtocol):
    """
    ClientProtocol speaking the WebTunnel sub-protocol.

    The sub-protocol name contains a '/', which is not an HTTP token, so
    websockets refuses it in ``subprotocols=``. It is offered through
    ``available_subprotocols`` instead and the server's echo is checked
    here without token parsing.
    """

    def process_subprotocol(self, headers: Headers) -> Optional[str]:
        values = [
            item.strip()
            for header_value in headers.get_all("Sec-WebSocket-Protocol")
            for item in header_value.split(",")
        ]
        if not values:
            return None
        if values != [WEBTUNNEL_PROTOCOL]:
            raise NegotiationError(f"unsupported subprotocol: {', '.join(values)}")
        return WEBTUNNEL_PROTOCOL


class WebTunnelConnection(ClientConnection):
    """ClientConnection whose handshake offers the WebTunnel sub-protocol"""

    def __init__(self, sock, protocol: ClientProtocol, **kwargs):
        # connect() builds a plain ClientProtocol and has no hook to replace it
        protocol.__class__ = WebTunnelClientProtocol
        protocol.available_subprotocols = [WEBTUNNEL_PROTOCOL]
        super().__init__(sock, protocol, **kwargs)
        # Owned by WebSocketChannel rather than a with block
        self.pending_legacy_warning = False


class WebSocketChannel(TunnelChannel):
    """TunnelChannel backed by a sync websockets connection"""
    
    def __init__(self, connection: ClientConnection):
        self.connection = connection
    
    def send(self, data: bytes) -> None:
        try:
            self.connection.send(data)
        except ConnectionClosed as e:
            raise ConnectionResetError("WebTunnel channel closed") from e
    
    def recv(self, timeout: Optional[float] = None) -> bytes:
        """
        Receive next frame.
        
        Raises:
            TimeoutError: If no frame arrives within timeout
        """
        try:
            message = self.connection.recv(timeout=timeout)
        except ConnectionClosed:
            return b""
        if isinstance(message, str):
            return message.encode("utf-8")
        return message
    
    def close(self) -> None:
        self.connection.close()


class WebTunnelChannelFactory(ChannelFactory):
    """Opens authenticated WebTunnel channels to the relay server"""
    
    def __init__(self, username: str, password: str, endpoint: TunnelEndpoint):
        self.username = username
        self._password = password
        self.endpoint = endpoint
    
    def _authorization(self) -> str:
        token = f"{self.username}:{self._password}".encode("utf-8")
        return "Basic " + base64.b64encode(token).decode("ascii")
    
    def create(self, uri: str, remote_port: int) -> TunnelChannel:
        """
        Open a channel to remote_port on the device.
        
        Raises:
            TunnelOpenError: If the relay rejects or cannot be reached
        """
        url = webtunnel_url(uri)
        headers = {
            "Authorization": self._authorization(),
            WEBTUNNEL_REMOTE_PORT_HEADER: str(remote_port),
        }
        ssl_context = self.endpoint.tls.create_ssl_context() if url.startswith("wss:") else None
        
        logger.debug(f"Opening WebTunnel channel to {url} (remote port {remote_port})")
        try:
            connection = connect(
                url,
                ssl=ssl_context,
                additional_headers=headers,
                open_timeout=self.endpoint.connect_timeout,
                proxy=self.endpoint.proxy.url,
                compression=None,
                ping_interval=None,
                create_connection=WebTunnelConnection,
            )
        except InvalidStatus as e:
            status = e.response.status_code
            if status in (401, 403):
                raise TunnelOpenError(f"Authentication rejected by {url} (HTTP {status})") from e
            raise TunnelOpenError(f"Relay server refused tunnel to {url} (HTTP {status})") from e
        except InvalidHandshake as e:
            raise TunnelOpenError(f"WebTunnel handshake with {url} failed: {e}") from e
        except TimeoutError as e:
            raise TunnelOpenError(f"Timed out connecting to {url}") from e
        except OSError as e:
            raise TunnelOpenError(f"Cannot connect to {url}: {e}") from e
        except (WebSocketException, ValueError) as e:
            raise TunnelOpenError(f"Cannot open WebTunnel channel to {url}: {e}") from e
        
        return WebSocketChannel(connection)
