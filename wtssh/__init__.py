"""
wtssh - SSH/SCP sessions to devices behind a Remote Manager WebTunnel relay

Opens a local port forwarded through the relay to the device's SSH port and
launches a local ssh, scp or PuTTY client against localhost:<port>:
- Credentials from options, configuration, environment or prompt
- Client selection (--ssh-client, --scp, ssh.executable, PATH search)
- Client argument synthesis per calling convention
- Exit status passed through from the client
"""

__version__ = "0.1.0"

from .core.exceptions import (
    WebTunnelSSHError,
    ConfigurationError,
    NoClientError,
    PromptError,
    TunnelOpenError,
    ProcessLaunchError,
)
from .domain.session import (
    Credentials,
    ClientVariant,
    ClientSpec,
    SessionOptions,
    SessionService,
    classify_client,
    select_client,
    synthesize_arguments,
)
from .domain.tunnel import TunnelEndpoint, TunnelSession, configure_endpoint

__all__ = [
    # Version
    "__version__",
    # Errors
    "WebTunnelSSHError",
    "ConfigurationError",
    "NoClientError",
    "PromptError",
    "TunnelOpenError",
    "ProcessLaunchError",
    # Session
    "Credentials",
    "ClientVariant",
    "ClientSpec",
    "SessionOptions",
    "SessionService",
    "classify_client",
    "select_client",
    "synthesize_arguments",
    # Tunnel
    "TunnelEndpoint",
    "TunnelSession",
    "configure_endpoint",
]
