"""
Client argument vector synthesis
"""
from typing import List, Optional, Sequence

from ...core.constants import DEFAULT_LOCAL_HOST
from .models import ClientSpec, ClientVariant


def synthesize_arguments(
    client: ClientSpec,
    bound_local_port: int,
    login_name: Optional[str],
    passthrough: Sequence[str],
) -> List[str]:
    """
    Build the argument vector for the client.
    
    The port flag comes first, then ``-l <login>`` unless the client is
    SCP, then the passthrough arguments unchanged, then ``localhost``
    unless the client is SCP.
    
    Args:
        client: Selected client
        bound_local_port: Port the forwarder is listening on
        login_name: Remote login name, may be empty
        passthrough: User arguments forwarded verbatim
    
    Returns:
        Argument vector (without the executable)
    
    Raises:
        ValueError: If bound_local_port is not a valid port
    """
    if not (1 <= bound_local_port <= 65535):
        raise ValueError(f"Invalid bound local port: {bound_local_port}")
    
    variant = client.variant
    arguments = [variant.port_flag, str(bound_local_port)]
    if login_name and variant is not ClientVariant.SCP:
        arguments.extend(["-l", login_name])
    arguments.extend(passthrough)
    if variant.takes_host:
        arguments.append(DEFAULT_LOCAL_HOST)
    return arguments
