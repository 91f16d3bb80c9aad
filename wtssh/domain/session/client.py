"""
SSH client selection and classification
"""
import ntpath
import posixpath

from ...core.exceptions import NoClientError
from ...core.interfaces import PlatformSupport
from ...core.logging import get_logger
from .models import ClientSpec, ClientVariant, SessionOptions

logger = get_logger(__name__)

SCP_CLIENT = "scp"


def _base_name(executable: str) -> str:
    # Accept both separators, a Windows path may be configured on any host
    return ntpath.basename(posixpath.basename(executable))


def classify_client(executable: str) -> ClientVariant:
    """
    Classify an executable by case-insensitive prefix of its base name.
    
    Names starting with ``scp`` are SCP, names starting with ``putty`` are
    PuTTY; everything else follows the OpenSSH convention.
    """
    name = _base_name(executable).lower()
    if name.startswith("scp"):
        return ClientVariant.SCP
    if name.startswith("putty"):
        return ClientVariant.PUTTY
    return ClientVariant.SSH


def select_client(options: SessionOptions, platform: PlatformSupport) -> ClientSpec:
    """
    Resolve the client executable to launch.
    
    Precedence: --ssh-client, --scp, ``ssh.executable`` property, then the
    first platform default found on the execution path.
    
    Raises:
        NoClientError: If no client executable is available
    """
    executable = options.ssh_client
    if not executable and options.use_scp:
        executable = SCP_CLIENT
    if not executable:
        executable = options.config.get_string("ssh.executable", "")
    if not executable:
        for name in platform.default_client_names():
            executable = platform.find_executable(name)
            if executable:
                break
    
    if not executable:
        raise NoClientError(
            "No SSH client program available. Please configure the SSH client program "
            "using the ssh.executable configuration property or ssh-client option."
        )
    
    spec = ClientSpec(executable_path=executable, variant=classify_client(executable))
    logger.debug(f"Selected {spec.variant.value} client: {spec.executable_path}")
    return spec
