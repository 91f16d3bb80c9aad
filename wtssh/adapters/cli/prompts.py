"""
Console prompts for credentials
"""
import sys
from typing import Optional, TextIO

from rich.console import Console

from ...core.interfaces import PromptProvider
from ...core.logging import get_stdout_console


class ConsolePromptProvider(PromptProvider):
    """Writes prompts on the rich stdout console, reads lines from stdin"""
    
    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.console = console or get_stdout_console()
        self._stream = stream
    
    @property
    def stream(self) -> Optional[TextIO]:
        return self._stream if self._stream is not None else sys.stdin
    
    def write(self, text: str) -> None:
        """Write prompt text without a trailing newline"""
        self.console.print(text, end="", markup=False, highlight=False, soft_wrap=True)
        self.console.file.flush()
    
    def read_line(self) -> Optional[str]:
        """Read one line; None if stdin is missing, closed or at EOF"""
        stream = self.stream
        if stream is None or stream.closed:
            return None
        try:
            line = stream.readline()
        except (OSError, ValueError):
            return None
        if not line:
            return None
        return line.rstrip("\r\n")
