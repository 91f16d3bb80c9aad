"""
Core infrastructure layer
"""
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import (
    PlatformSupport,
    PromptProvider,
    ProcessHandle,
    ProcessLauncher,
    TunnelChannel,
    ChannelFactory,
    Forwarder,
    TunnelOpener,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "PlatformSupport",
    "PromptProvider",
    "ProcessHandle",
    "ProcessLauncher",
    "TunnelChannel",
    "ChannelFactory",
    "Forwarder",
    "TunnelOpener",
]
