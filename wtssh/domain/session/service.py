"""
Session service - tunnel setup and client handoff
"""
from typing import Callable, Optional

from ...core.interfaces import (
    ChannelFactory,
    PlatformSupport,
    ProcessLauncher,
    PromptProvider,
    TunnelOpener,
)
from ...core.logging import get_logger, register_secret
from ..tunnel.channel import WebTunnelChannelFactory
from ..tunnel.endpoint import configure_endpoint
from ..tunnel.models import TunnelEndpoint, TunnelSession
from .arguments import synthesize_arguments
from .client import select_client
from .credentials import CredentialStore
from .handoff import hand_off
from .models import SessionOptions

logger = get_logger(__name__)

ChannelFactoryBuilder = Callable[[str, str, TunnelEndpoint], ChannelFactory]


class SessionService:
    """
    Runs one tunneled client session.
    
    No direct dependency on CLI, Typer, sockets or the terminal; every
    collaborator is injected.
    """
    
    def __init__(
        self,
        platform: PlatformSupport,
        prompts: PromptProvider,
        launcher: ProcessLauncher,
        opener: TunnelOpener,
        channel_factory_builder: Optional[ChannelFactoryBuilder] = None,
    ):
        self.platform = platform
        self.prompts = prompts
        self.launcher = launcher
        self.opener = opener
        self.channel_factory_builder = channel_factory_builder or WebTunnelChannelFactory
    
    def run(self, options: SessionOptions) -> int:
        """
        Open the tunnel, launch the client and wait for it.
        
        Args:
            options: Parsed options; ``options.uri`` must be set
        
        Returns:
            The client's exit code
        
        Raises:
            ConfigurationError: If no client is available or a property is invalid
            PromptError: If credentials are missing and cannot be prompted for
            TunnelOpenError: If the tunnel cannot be established
            ProcessLaunchError: If the client cannot be started
        """
        if not options.uri:
            raise ValueError("Remote URI is required")
        
        endpoint = configure_endpoint(options.config)
        client = select_client(options, self.platform)
        
        credentials = options.credentials
        if not credentials.username:
            credentials.username = options.config.get_string("webtunnel.username", "")
        if not credentials.password:
            credentials.password = options.config.get_string("webtunnel.password", "")
        CredentialStore(credentials, self.prompts, self.platform).ensure_complete()
        register_secret(credentials.password)
        
        session = TunnelSession(
            remote_uri=options.uri,
            requested_local_port=options.local_port,
            remote_port=options.remote_port,
            connect_timeout=endpoint.connect_timeout,
            remote_timeout=endpoint.remote_timeout,
            local_timeout=endpoint.local_timeout,
        )
        session.validate()
        
        channel_factory = self.channel_factory_builder(
            credentials.username, credentials.password, endpoint
        )
        forwarder = self.opener.open(
            session.requested_local_port,
            session.remote_port,
            session.remote_uri,
            channel_factory,
        )
        try:
            forwarder.set_remote_timeout(session.remote_timeout)
            forwarder.set_local_timeout(session.local_timeout)
            session.bound_local_port = forwarder.local_port
            
            arguments = synthesize_arguments(
                client,
                session.bound_local_port,
                credentials.login_name,
                options.passthrough,
            )
            return hand_off(self.launcher, client, arguments)
        finally:
            forwarder.close()
