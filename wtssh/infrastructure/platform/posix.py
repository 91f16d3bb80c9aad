"""
POSIX terminal and executable support
"""
import os
import shutil
import sys
import termios
from typing import Optional, Sequence

from ...core.interfaces import PlatformSupport


class PosixPlatform(PlatformSupport):
    """termios-based echo control, PATH lookup for ssh then putty"""
    
    CLIENT_NAMES = ("ssh", "putty")
    
    def _stdin_fd(self) -> Optional[int]:
        stream = sys.stdin
        if stream is None:
            return None
        try:
            fd = stream.fileno()
        except (AttributeError, ValueError, OSError):
            return None
        try:
            return fd if os.isatty(fd) else None
        except OSError:
            return None
    
    def get_echo(self) -> Optional[bool]:
        fd = self._stdin_fd()
        if fd is None:
            return None
        try:
            lflag = termios.tcgetattr(fd)[3]
        except termios.error:
            return None
        return bool(lflag & termios.ECHO)
    
    def set_echo(self, enabled: bool) -> None:
        fd = self._stdin_fd()
        if fd is None:
            return
        try:
            attrs = termios.tcgetattr(fd)
            if enabled:
                attrs[3] |= termios.ECHO
            else:
                attrs[3] &= ~termios.ECHO
            termios.tcsetattr(fd, termios.TCSANOW, attrs)
        except termios.error:
            # No usable terminal; input stays visible
            return
    
    def find_executable(self, name: str) -> Optional[str]:
        return shutil.which(name)
    
    def default_client_names(self) -> Sequence[str]:
        return self.CLIENT_NAMES
