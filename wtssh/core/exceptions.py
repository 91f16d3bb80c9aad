"""
Unified exception definitions
"""


class WebTunnelSSHError(Exception):
    """Base exception class"""
    pass


class ConfigurationError(WebTunnelSSHError):
    """Configuration error"""
    pass


class NoClientError(ConfigurationError):
    """No usable SSH client executable"""
    pass


class PromptError(WebTunnelSSHError):
    """Credential required but no interactive input available"""
    pass


class TunnelOpenError(WebTunnelSSHError):
    """Tunnel to the remote device could not be established"""
    pass


class ProcessLaunchError(WebTunnelSSHError):
    """SSH client process could not be started"""
    pass
