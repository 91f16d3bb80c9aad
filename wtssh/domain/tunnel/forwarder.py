"""
Local port forwarder over WebTunnel channels
"""
import socket
import threading
from typing import Optional

from ...core.constants import (
    DEFAULT_REMOTE_TIMEOUT,
    DEFAULT_LOCAL_TIMEOUT,
    RELAY_BUFFER_SIZE,
)
from ...core.exceptions import TunnelOpenError
from ...core.interfaces import ChannelFactory, Forwarder, TunnelChannel, TunnelOpener
from ...core.logging import get_logger

logger = get_logger(__name__)

LISTEN_HOST = "127.0.0.1"


class LocalPortForwarder(Forwarder):
    """
    Local TCP listener forwarding each connection over its own channel.
    
    How it works:
    1. open() binds the listening socket and opens the first channel, so
       the bound port is known and authentication has been checked
    2. An acceptor thread accepts local connections
    3. Each connection is relayed to a channel by two threads, one per
       direction, each with its own idle timeout
    """
    
    def __init__(
        self,
        local_port: int,
        remote_port: int,
        uri: str,
        channel_factory: ChannelFactory,
    ):
        """
        Initialize forwarder.
        
        Args:
            local_port: Local port to bind, 0 for ephemeral
            remote_port: Service port on the remote device
            uri: Remote device URI
            channel_factory: Authenticated channel factory
        """
        self.requested_port = local_port
        self.remote_port = remote_port
        self.uri = uri
        self.channel_factory = channel_factory
        self.remote_timeout: float = DEFAULT_REMOTE_TIMEOUT
        self.local_timeout: float = DEFAULT_LOCAL_TIMEOUT
        self._listener: Optional[socket.socket] = None
        self._pending: Optional[TunnelChannel] = None
        self._running = False
        self._acceptor_thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
    
    @property
    def local_port(self) -> int:
        if self._listener is None:
            raise RuntimeError("Forwarder is not open")
        return self._listener.getsockname()[1]
    
    def set_remote_timeout(self, timeout: float) -> None:
        self.remote_timeout = timeout
    
    def set_local_timeout(self, timeout: float) -> None:
        self.local_timeout = timeout
    
    def open(self) -> None:
        """
        Bind the local port and open the first channel.
        
        Raises:
            RuntimeError: If forwarder is already open
            TunnelOpenError: If binding or the first channel fails
        """
        with self._lock:
            if self._running:
                raise RuntimeError("Forwarder is already open")
            
            listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            try:
                listener.bind((LISTEN_HOST, self.requested_port))
                listener.listen(5)
            except OSError as e:
                listener.close()
                raise TunnelOpenError(
                    f"Cannot bind local port {self.requested_port}: {e}"
                ) from e
            
            try:
                self._pending = self.channel_factory.create(self.uri, self.remote_port)
            except BaseException:
                listener.close()
                raise
            
            self._listener = listener
            self._running = True
            self._acceptor_thread = threading.Thread(
                target=self._run_acceptor,
                daemon=True,
                name=f"Forwarder-Acceptor-{self.local_port}"
            )
            self._acceptor_thread.start()
        
        logger.info(f"Forwarding localhost:{self.local_port} to {self.uri} port {self.remote_port}")
    
    def close(self) -> None:
        """Stop accepting and release the listener (idempotent)"""
        with self._lock:
            if not self._running:
                return
            self._running = False
            
            if self._pending is not None:
                self._pending.close()
                self._pending = None
            if self._listener is not None:
                self._listener.close()
        
        if self._acceptor_thread and self._acceptor_thread.is_alive():
            self._acceptor_thread.join(timeout=2.0)
    
    def is_running(self) -> bool:
        with self._lock:
            return self._running
    
    def _take_channel(self) -> TunnelChannel:
        with self._lock:
            channel, self._pending = self._pending, None
        if channel is not None:
            return channel
        return self.channel_factory.create(self.uri, self.remote_port)
    
    def _run_acceptor(self) -> None:
        """Accept local connections until closed"""
        assert self._listener is not None
        self._listener.settimeout(1.0)
        while self._running:
            try:
                sock, address = self._listener.accept()
            except socket.timeout:
                continue
            except OSError:
                if self._running:
                    logger.error("Local listener failed", exc_info=True)
                break
            
            logger.debug(f"Accepted local connection from {address[0]}:{address[1]}")
            threading.Thread(
                target=self._handle_connection,
                args=(sock,),
                daemon=True,
                name=f"Forwarder-Handler-{address[1]}"
            ).start()
    
    def _handle_connection(self, sock: socket.socket) -> None:
        """Relay one local connection over one channel"""
        try:
            channel = self._take_channel()
        except TunnelOpenError as e:
            logger.error(f"Cannot open tunnel channel: {e}")
            sock.close()
            return
        except Exception:
            logger.exception("Unexpected failure opening tunnel channel")
            sock.close()
            return
        
        sock.settimeout(self.local_timeout)
        downstream = threading.Thread(
            target=self._remote_to_local,
            args=(channel, sock),
            daemon=True,
        )
        downstream.start()
        try:
            self._local_to_remote(sock, channel)
        finally:
            channel.close()
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            downstream.join(timeout=2.0)
            sock.close()
    
    def _local_to_remote(self, sock: socket.socket, channel: TunnelChannel) -> None:
        while True:
            try:
                data = sock.recv(RELAY_BUFFER_SIZE)
            except socket.timeout:
                logger.info(f"Local connection idle for {self.local_timeout}s, closing")
                return
            except OSError:
                return
            if not data:
                return
            try:
                channel.send(data)
            except OSError:
                return
    
    def _remote_to_local(self, channel: TunnelChannel, sock: socket.socket) -> None:
        try:
            while True:
                try:
                    data = channel.recv(timeout=self.remote_timeout)
                except TimeoutError:
                    logger.info(f"Remote channel idle for {self.remote_timeout}s, closing")
                    return
                if not data:
                    return
                try:
                    sock.sendall(data)
                except OSError:
                    return
        finally:
            # Unblock the upstream direction
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass


class WebTunnelOpener(TunnelOpener):
    """Opens LocalPortForwarder instances"""
    
    def open(
        self,
        local_port: int,
        remote_port: int,
        uri: str,
        channel_factory: ChannelFactory,
    ) -> LocalPortForwarder:
        forwarder = LocalPortForwarder(local_port, remote_port, uri, channel_factory)
        forwarder.open()
        return forwarder
