"""
Platform support selected once per process
"""
import os

from ...core.interfaces import PlatformSupport

if os.name == "nt":
    from .windows import WindowsPlatform as _Platform
else:
    from .posix import PosixPlatform as _Platform


def get_platform() -> PlatformSupport:
    """Get platform support for the running OS"""
    return _Platform()


__all__ = ["get_platform"]
