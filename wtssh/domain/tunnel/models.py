"""
Tunnel domain models
"""
import os
import ssl
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from urllib.parse import quote

from ...core.constants import (
    DEFAULT_SSH_PORT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_REMOTE_TIMEOUT,
    DEFAULT_LOCAL_TIMEOUT,
    DEFAULT_TLS_CIPHERS,
    DEFAULT_PROXY_PORT,
)


@dataclass
class TLSSettings:
    """TLS client settings"""
    accept_unknown_certificate: bool = True
    ciphers: str = DEFAULT_TLS_CIPHERS
    ca_location: str = ""
    extended_verification: bool = False
    
    def create_ssl_context(self) -> ssl.SSLContext:
        """
        Build client SSL context.
        
        Unknown certificates are accepted by disabling verification;
        extended verification adds hostname checking on top of chain
        verification.
        """
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        context.set_ciphers(self.ciphers)
        
        if self.ca_location:
            if os.path.isdir(self.ca_location):
                context.load_verify_locations(capath=self.ca_location)
            else:
                context.load_verify_locations(cafile=self.ca_location)
        else:
            context.load_default_certs(ssl.Purpose.SERVER_AUTH)
        
        if self.accept_unknown_certificate:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        else:
            context.check_hostname = self.extended_verification
            context.verify_mode = ssl.CERT_REQUIRED
        return context


@dataclass
class ProxySettings:
    """HTTP proxy settings"""
    enable: bool = False
    host: str = ""
    port: int = DEFAULT_PROXY_PORT
    username: str = ""
    password: str = field(default="", repr=False)
    
    @property
    def url(self) -> Optional[str]:
        """Proxy URL for the WebSocket client, None if disabled"""
        if not self.enable or not self.host:
            return None
        auth = ""
        if self.username:
            auth = quote(self.username, safe="")
            if self.password:
                auth += ":" + quote(self.password, safe="")
            auth += "@"
        return f"http://{auth}{self.host}:{self.port}"


@dataclass
class TunnelEndpoint:
    """Everything the forwarder needs besides credentials"""
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    remote_timeout: float = DEFAULT_REMOTE_TIMEOUT
    local_timeout: float = DEFAULT_LOCAL_TIMEOUT
    tls: TLSSettings = field(default_factory=TLSSettings)
    proxy: ProxySettings = field(default_factory=ProxySettings)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (proxy password omitted)"""
        return {
            "connect_timeout": self.connect_timeout,
            "remote_timeout": self.remote_timeout,
            "local_timeout": self.local_timeout,
            "tls": {
                "accept_unknown_certificate": self.tls.accept_unknown_certificate,
                "ciphers": self.tls.ciphers,
                "ca_location": self.tls.ca_location,
                "extended_verification": self.tls.extended_verification,
            },
            "proxy": {
                "enable": self.proxy.enable,
                "host": self.proxy.host,
                "port": self.proxy.port,
                "username": self.proxy.username,
            },
        }


@dataclass
class TunnelSession:
    """Live forwarding relationship"""
    remote_uri: str
    requested_local_port: int = 0
    remote_port: int = DEFAULT_SSH_PORT
    bound_local_port: Optional[int] = None
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    remote_timeout: float = DEFAULT_REMOTE_TIMEOUT
    local_timeout: float = DEFAULT_LOCAL_TIMEOUT
    
    def validate(self) -> None:
        """Validate configuration"""
        from ...core.exceptions import ConfigurationError
        
        if not (0 <= self.requested_local_port <= 65535):
            raise ConfigurationError(f"Invalid local_port: {self.requested_local_port}")
        if not (1 <= self.remote_port <= 65535):
            raise ConfigurationError(f"Invalid remote_port: {self.remote_port}")
