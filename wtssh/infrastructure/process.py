"""
subprocess-based client launcher
"""
import subprocess
from typing import Sequence

from ..core.interfaces import ProcessHandle, ProcessLauncher
from ..core.logging import get_logger

logger = get_logger(__name__)


class SubprocessHandle(ProcessHandle):
    """Waitable handle around a Popen object"""
    
    def __init__(self, process: subprocess.Popen):
        self.process = process
    
    def wait(self) -> int:
        """
        Wait for the child.
        
        An interrupt reaches the child through the process group, so the
        wait continues until the child itself has exited. A child killed
        by signal N is reported as 128 + N.
        """
        while True:
            try:
                rc = self.process.wait()
                break
            except KeyboardInterrupt:
                logger.debug("Interrupted, waiting for SSH client to exit")
        if rc < 0:
            return 128 - rc
        return rc


class SubprocessLauncher(ProcessLauncher):
    """Launches the client with the controlling terminal inherited"""
    
    def launch(self, executable: str, arguments: Sequence[str]) -> SubprocessHandle:
        """
        Raises:
            OSError: If the executable cannot be started
        """
        process = subprocess.Popen([executable, *arguments])
        logger.debug(f"Started {executable} with PID {process.pid}")
        return SubprocessHandle(process)
