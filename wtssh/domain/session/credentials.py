"""
Credential acquisition with interactive fallback
"""
from contextlib import contextmanager
from typing import Iterator

from ...core.constants import USERNAME_PROMPT, PASSWORD_PROMPT
from ...core.exceptions import PromptError
from ...core.interfaces import PlatformSupport, PromptProvider
from ...core.logging import get_logger
from .models import Credentials

logger = get_logger(__name__)


@contextmanager
def no_echo(platform: PlatformSupport) -> Iterator[None]:
    """Disable terminal echo, restoring the prior state on every exit path"""
    prior = platform.get_echo()
    platform.set_echo(False)
    try:
        yield
    finally:
        platform.set_echo(True if prior is None else prior)


class CredentialStore:
    """
    Holds the relay credentials for one run.
    
    Missing username and password are requested once each from the
    prompt provider. The password is read with echo disabled and is
    never written anywhere.
    """
    
    def __init__(
        self,
        credentials: Credentials,
        prompts: PromptProvider,
        platform: PlatformSupport,
    ):
        self.credentials = credentials
        self.prompts = prompts
        self.platform = platform
    
    def _read(self, field_name: str) -> str:
        line = self.prompts.read_line()
        if line is None:
            raise PromptError(f"Remote Manager {field_name} required but no interactive input is available")
        return line
    
    def ensure_complete(self) -> Credentials:
        """
        Prompt for missing username and password.
        
        Returns:
            The completed credentials
        
        Raises:
            PromptError: If a field is missing and input is unavailable
        """
        if self.credentials.is_complete:
            return self.credentials

        if not self.credentials.username:
            self.prompts.write(USERNAME_PROMPT)
            self.credentials.username = self._read("username")
        
        if not self.credentials.password:
            self.prompts.write(PASSWORD_PROMPT)
            try:
                with no_echo(self.platform):
                    self.credentials.password = self._read("password")
            finally:
                self.prompts.write("\n")
        
        logger.debug(f"Using Remote Manager username {self.credentials.username!r}")
        return self.credentials
