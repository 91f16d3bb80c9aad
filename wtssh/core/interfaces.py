"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence


class PlatformSupport(ABC):
    """Terminal echo control and client discovery for one OS family"""
    
    @abstractmethod
    def get_echo(self) -> Optional[bool]:
        """Return current echo state, or None if no terminal is attached"""
        pass
    
    @abstractmethod
    def set_echo(self, enabled: bool) -> None:
        """Enable or disable local echo (best effort, never raises)"""
        pass
    
    @abstractmethod
    def find_executable(self, name: str) -> Optional[str]:
        """Search the execution path for a program"""
        pass
    
    @abstractmethod
    def default_client_names(self) -> Sequence[str]:
        """Client executables to probe, in order of preference"""
        pass


class PromptProvider(ABC):
    """User prompt interface"""
    
    @abstractmethod
    def write(self, text: str) -> None:
        """Write prompt text without a trailing newline"""
        pass
    
    @abstractmethod
    def read_line(self) -> Optional[str]:
        """Read one line without its newline; None if input is unavailable"""
        pass


class ProcessHandle(ABC):
    """Handle to a launched child process"""
    
    @abstractmethod
    def wait(self) -> int:
        """Block until the child exits and return its exit code"""
        pass


class ProcessLauncher(ABC):
    """OS process launcher interface"""
    
    @abstractmethod
    def launch(self, executable: str, arguments: Sequence[str]) -> ProcessHandle:
        """Launch executable with inherited stdio"""
        pass


class TunnelChannel(ABC):
    """Bidirectional byte channel to the remote service"""
    
    @abstractmethod
    def send(self, data: bytes) -> None:
        pass
    
    @abstractmethod
    def recv(self, timeout: Optional[float] = None) -> bytes:
        """Receive data; empty bytes when the channel is closed"""
        pass
    
    @abstractmethod
    def close(self) -> None:
        pass


class ChannelFactory(ABC):
    """Authenticated channel factory interface"""
    
    @abstractmethod
    def create(self, uri: str, remote_port: int) -> TunnelChannel:
        """Open an authenticated channel to remote_port on the device at uri"""
        pass


class Forwarder(ABC):
    """Local TCP listener bound to a tunnel"""
    
    @property
    @abstractmethod
    def local_port(self) -> int:
        pass
    
    @abstractmethod
    def set_remote_timeout(self, timeout: float) -> None:
        pass
    
    @abstractmethod
    def set_local_timeout(self, timeout: float) -> None:
        pass
    
    @abstractmethod
    def close(self) -> None:
        pass


class TunnelOpener(ABC):
    """Tunnel session opener interface"""
    
    @abstractmethod
    def open(
        self,
        local_port: int,
        remote_port: int,
        uri: str,
        channel_factory: ChannelFactory,
    ) -> Forwarder:
        """Bind a local port forwarding to remote_port on the device"""
        pass
