"""
Process handoff to the SSH client
"""
from typing import Sequence

from ...core.exceptions import ProcessLaunchError
from ...core.interfaces import ProcessLauncher
from ...core.logging import get_logger
from .models import ClientSpec

logger = get_logger(__name__)


def hand_off(launcher: ProcessLauncher, client: ClientSpec, arguments: Sequence[str]) -> int:
    """
    Launch the client and wait for it.
    
    Returns:
        The client's exit code, unchanged
    
    Raises:
        ProcessLaunchError: If the client cannot be started
    """
    logger.debug(f"Launching SSH client: {client.executable_path}")
    try:
        handle = launcher.launch(client.executable_path, arguments)
    except OSError as e:
        raise ProcessLaunchError(f"Cannot launch {client.executable_path}: {e}") from e
    
    rc = handle.wait()
    logger.debug(f"SSH client terminated with exit code {rc}")
    return rc
