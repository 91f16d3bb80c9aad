import base64
import queue
import socket
import threading

import pytest
from websockets.sync.server import serve

from wtssh.core.constants import WEBTUNNEL_PROTOCOL, WEBTUNNEL_REMOTE_PORT_HEADER
from wtssh.core.exceptions import TunnelOpenError
from wtssh.core.interfaces import ChannelFactory, TunnelChannel
from wtssh.domain.tunnel import (
    LocalPortForwarder,
    TunnelEndpoint,
    WebTunnelChannelFactory,
    WebTunnelOpener,
    webtunnel_url,
)


class QueueChannel(TunnelChannel):
    """In-memory channel: 'sent' collects upstream data, 'incoming' feeds downstream"""

    def __init__(self):
        self.sent = queue.Queue()
        self.incoming = queue.Queue()
        self.closed = threading.Event()

    def send(self, data):
        if self.closed.is_set():
            raise ConnectionResetError("closed")
        self.sent.put(data)

    def recv(self, timeout=None):
        try:
            return self.incoming.get(timeout=timeout)
        except queue.Empty:
            raise TimeoutError

    def close(self):
        self.closed.set()
        self.incoming.put(b"")


class QueueChannelFactory(ChannelFactory):
    def __init__(self, error=None):
        self.error = error
        self.channels = []
        self.requests = []

    def create(self, uri, remote_port):
        self.requests.append((uri, remote_port))
        if self.error is not None:
            raise self.error
        channel = QueueChannel()
        self.channels.append(channel)
        return channel


@pytest.fixture
def forwarder():
    factory = QueueChannelFactory()
    fwd = WebTunnelOpener().open(0, 22, "https://device.example.net", factory)
    yield fwd, factory
    fwd.close()


def test_binds_ephemeral_port_and_opens_first_channel(forwarder):
    fwd, factory = forwarder
    assert 1 <= fwd.local_port <= 65535
    assert factory.requests == [("https://device.example.net", 22)]


def test_relays_both_directions(forwarder):
    fwd, factory = forwarder
    with socket.create_connection(("127.0.0.1", fwd.local_port), timeout=5) as client:
        client.sendall(b"SSH-2.0-client\r\n")
        channel = factory.channels[0]
        assert channel.sent.get(timeout=5) == b"SSH-2.0-client\r\n"

        channel.incoming.put(b"SSH-2.0-server\r\n")
        assert client.recv(1024) == b"SSH-2.0-server\r\n"

    assert channel.closed.wait(timeout=5)


def test_remote_close_closes_local_connection(forwarder):
    fwd, factory = forwarder
    with socket.create_connection(("127.0.0.1", fwd.local_port), timeout=5) as client:
        client.sendall(b"x")
        channel = factory.channels[0]
        channel.sent.get(timeout=5)
        channel.incoming.put(b"")
        assert client.recv(1024) == b""


def test_second_connection_gets_new_channel(forwarder):
    fwd, factory = forwarder
    with socket.create_connection(("127.0.0.1", fwd.local_port), timeout=5) as first:
        first.sendall(b"1")
        factory.channels[0].sent.get(timeout=5)
        with socket.create_connection(("127.0.0.1", fwd.local_port), timeout=5) as second:
            second.sendall(b"2")
            # Wait for the handler thread to open the second channel
            for _ in range(50):
                if len(factory.channels) == 2:
                    break
                threading.Event().wait(0.1)
            assert factory.channels[1].sent.get(timeout=5) == b"2"


def test_remote_idle_timeout_closes_connection(forwarder):
    fwd, factory = forwarder
    fwd.set_remote_timeout(0.2)
    with socket.create_connection(("127.0.0.1", fwd.local_port), timeout=5) as client:
        assert client.recv(1024) == b""


def test_first_channel_failure_is_tunnel_open_error():
    factory = QueueChannelFactory(error=TunnelOpenError("Authentication rejected"))
    fwd = LocalPortForwarder(0, 22, "https://device.example.net", factory)
    with pytest.raises(TunnelOpenError):
        fwd.open()
    assert not fwd.is_running()


def test_bind_failure_is_tunnel_open_error():
    with socket.socket() as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        port = busy.getsockname()[1]
        fwd = LocalPortForwarder(port, 22, "https://device.example.net", QueueChannelFactory())
        with pytest.raises(TunnelOpenError):
            fwd.open()


def test_close_is_idempotent(forwarder):
    fwd, factory = forwarder
    fwd.close()
    fwd.close()
    assert not fwd.is_running()
    assert factory.channels[0].closed.is_set()


@pytest.mark.parametrize("uri,expected", [
    ("https://abc.my-devices.net", "wss://abc.my-devices.net/webtunnel"),
    ("http://abc.my-devices.net:8080/", "ws://abc.my-devices.net:8080/webtunnel"),
    ("HTTPS://abc.my-devices.net/ignored?x=1", "wss://abc.my-devices.net/webtunnel"),
    ("wss://abc.my-devices.net:8443", "wss://abc.my-devices.net:8443/webtunnel"),
])
def test_webtunnel_url(uri, expected):
    assert webtunnel_url(uri) == expected


@pytest.mark.parametrize("uri", ["ftp://abc", "abc.my-devices.net", "https://"])
def test_webtunnel_url_rejects(uri):
    with pytest.raises(TunnelOpenError):
        webtunnel_url(uri)


RELAY_USER = "alice"
RELAY_PASSWORD = "s3cret"
RELAY_AUTH = "Basic " + base64.b64encode(b"alice:s3cret").decode("ascii")


@pytest.fixture
def relay():
    """Local WebTunnel relay that checks credentials and echoes every frame"""
    requests = []

    def process_request(connection, request):
        headers = request.headers
        requests.append({
            "path": request.path,
            "authorization": headers.get("Authorization"),
            "protocol": headers.get("Sec-WebSocket-Protocol"),
            "remote_port": headers.get(WEBTUNNEL_REMOTE_PORT_HEADER),
        })
        # The server side of websockets cannot parse this name either
        del headers["Sec-WebSocket-Protocol"]
        if headers.get("Authorization") != RELAY_AUTH:
            return connection.respond(401, "Unauthorized\n")
        return None

    def process_response(connection, request, response):
        if response.status_code == 101:
            response.headers["Sec-WebSocket-Protocol"] = WEBTUNNEL_PROTOCOL
        return None

    def echo(connection):
        for message in connection:
            connection.send(message)

    with serve(
        echo,
        "127.0.0.1",
        0,
        process_request=process_request,
        process_response=process_response,
    ) as server:
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        port = server.socket.getsockname()[1]
        yield f"http://127.0.0.1:{port}", requests
    thread.join(timeout=5)


def relay_factory(username=RELAY_USER, password=RELAY_PASSWORD, connect_timeout=5):
    return WebTunnelChannelFactory(username, password, TunnelEndpoint(connect_timeout=connect_timeout))


def test_channel_handshake_and_round_trip(relay):
    uri, requests = relay
    channel = relay_factory().create(uri, 2222)
    try:
        channel.send(b"SSH-2.0-client\r\n")
        assert channel.recv(timeout=5) == b"SSH-2.0-client\r\n"
    finally:
        channel.close()

    assert requests == [{
        "path": "/webtunnel",
        "authorization": RELAY_AUTH,
        "protocol": WEBTUNNEL_PROTOCOL,
        "remote_port": "2222",
    }]


def test_channel_recv_times_out(relay):
    uri, _ = relay
    channel = relay_factory().create(uri, 22)
    try:
        with pytest.raises(TimeoutError):
            channel.recv(timeout=0.2)
    finally:
        channel.close()


def test_rejected_credentials_are_tunnel_open_error(relay):
    uri, requests = relay
    with pytest.raises(TunnelOpenError, match="Authentication rejected"):
        relay_factory(password="wrong").create(uri, 22)
    assert len(requests) == 1


def test_unanswered_handshake_is_tunnel_open_error():
    with socket.socket() as silent:
        silent.bind(("127.0.0.1", 0))
        silent.listen(1)
        port = silent.getsockname()[1]
        with pytest.raises(TunnelOpenError):
            relay_factory(connect_timeout=0.5).create(f"http://127.0.0.1:{port}", 22)


def test_unreachable_relay_is_tunnel_open_error():
    with socket.socket() as closed:
        closed.bind(("127.0.0.1", 0))
        port = closed.getsockname()[1]
    with pytest.raises(TunnelOpenError):
        relay_factory().create(f"http://127.0.0.1:{port}", 22)


def test_forwarder_relays_through_webtunnel(relay):
    uri, requests = relay
    fwd = WebTunnelOpener().open(0, 22, uri, relay_factory())
    try:
        with socket.create_connection(("127.0.0.1", fwd.local_port), timeout=5) as client:
            client.sendall(b"SSH-2.0-client\r\n")
            assert client.recv(1024) == b"SSH-2.0-client\r\n"
    finally:
        fwd.close()

    assert requests[0]["remote_port"] == "22"
    assert requests[0]["authorization"] == RELAY_AUTH


def test_forwarder_with_rejected_credentials_does_not_open(relay):
    uri, _ = relay
    fwd = LocalPortForwarder(0, 22, uri, relay_factory(password="wrong"))
    with pytest.raises(TunnelOpenError):
        fwd.open()
    assert not fwd.is_running()
