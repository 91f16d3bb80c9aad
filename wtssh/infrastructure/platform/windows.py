"""
Windows console and executable support
"""
import ctypes
import shutil
from typing import Optional, Sequence

from ...core.interfaces import PlatformSupport

STD_INPUT_HANDLE = -10
ENABLE_ECHO_INPUT = 0x0004


class WindowsPlatform(PlatformSupport):
    """Console-mode echo control, PATH lookup for ssh.exe then putty.exe"""
    
    CLIENT_NAMES = ("ssh.exe", "putty.exe")
    
    def _console_mode(self):
        kernel32 = ctypes.windll.kernel32
        handle = kernel32.GetStdHandle(STD_INPUT_HANDLE)
        mode = ctypes.c_uint32()
        if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            return None, None
        return handle, mode.value
    
    def get_echo(self) -> Optional[bool]:
        _, mode = self._console_mode()
        if mode is None:
            return None
        return bool(mode & ENABLE_ECHO_INPUT)
    
    def set_echo(self, enabled: bool) -> None:
        handle, mode = self._console_mode()
        if mode is None:
            return
        mode = mode | ENABLE_ECHO_INPUT if enabled else mode & ~ENABLE_ECHO_INPUT
        ctypes.windll.kernel32.SetConsoleMode(handle, mode)
    
    def find_executable(self, name: str) -> Optional[str]:
        return shutil.which(name)
    
    def default_client_names(self) -> Sequence[str]:
        return self.CLIENT_NAMES
