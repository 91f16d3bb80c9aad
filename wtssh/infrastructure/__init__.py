"""
Infrastructure layer - OS processes and terminal platform support
"""
from .platform import get_platform
from .process import SubprocessLauncher, SubprocessHandle

__all__ = ["get_platform", "SubprocessLauncher", "SubprocessHandle"]
