"""
Session domain models
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ...core.config import Configuration
from ...core.constants import DEFAULT_SSH_PORT


@dataclass
class Credentials:
    """Relay credentials and optional remote login name"""
    username: str = ""
    password: str = field(default="", repr=False)
    login_name: str = ""
    
    @property
    def is_complete(self) -> bool:
        return bool(self.username) and bool(self.password)


class ClientVariant(Enum):
    """Calling convention of an SSH-family executable"""
    SSH = "ssh"
    SCP = "scp"
    PUTTY = "putty"
    
    @property
    def port_flag(self) -> str:
        return "-p" if self is ClientVariant.SSH else "-P"
    
    @property
    def takes_host(self) -> bool:
        """SCP carries its destination inside its own path arguments"""
        return self is not ClientVariant.SCP


@dataclass(frozen=True)
class ClientSpec:
    """Chosen client executable and its calling convention"""
    executable_path: str
    variant: ClientVariant


@dataclass
class SessionOptions:
    """Per-run state collected from the command line and configuration"""
    uri: Optional[str] = None
    passthrough: List[str] = field(default_factory=list)
    credentials: Credentials = field(default_factory=Credentials)
    local_port: int = 0
    remote_port: int = DEFAULT_SSH_PORT
    ssh_client: Optional[str] = None
    use_scp: bool = False
    help_requested: bool = False
    config_files: List[Path] = field(default_factory=list)
    defines: List[str] = field(default_factory=list)
    config: Configuration = field(default_factory=Configuration)
