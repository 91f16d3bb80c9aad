"""
Project constants definitions
"""

# ============================================================
# Default Values
# ============================================================

DEFAULT_SSH_PORT = 22
DEFAULT_LOCAL_HOST = "localhost"
DEFAULT_CONFIG_PATH = "~/.wtssh.toml"
ENV_PREFIX = "WTSSH_"

# ============================================================
# Prompts
# ============================================================

USERNAME_PROMPT = "Remote Manager Username: "
PASSWORD_PROMPT = "Remote Manager Password: "

# ============================================================
# Tunnel Defaults (seconds)
# ============================================================

DEFAULT_CONNECT_TIMEOUT = 30
DEFAULT_REMOTE_TIMEOUT = 300
DEFAULT_LOCAL_TIMEOUT = 7200

# ============================================================
# TLS / Proxy Defaults
# ============================================================

DEFAULT_TLS_CIPHERS = "ALL:!ADH:!LOW:!EXP:!MD5:@STRENGTH"
DEFAULT_PROXY_PORT = 80

# ============================================================
# WebTunnel Protocol
# ============================================================

WEBTUNNEL_PATH = "/webtunnel"
WEBTUNNEL_PROTOCOL = "com.appinf.webtunnel.client/1.0"
WEBTUNNEL_REMOTE_PORT_HEADER = "X-WebTunnel-RemotePort"
RELAY_BUFFER_SIZE = 8192

# ============================================================
# Exit Codes (sysexits.h)
# ============================================================

EXIT_OK = 0
EXIT_NOINPUT = 66
EXIT_UNAVAILABLE = 69
EXIT_SOFTWARE = 70
EXIT_OSERR = 71
EXIT_CONFIG = 78
EXIT_INTERRUPTED = 130
