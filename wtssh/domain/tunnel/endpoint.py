"""
Tunnel endpoint configuration from properties
"""
from ...core.config import Configuration
from ...core.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_REMOTE_TIMEOUT,
    DEFAULT_LOCAL_TIMEOUT,
    DEFAULT_TLS_CIPHERS,
    DEFAULT_PROXY_PORT,
)
from ...core.exceptions import ConfigurationError
from ...core.logging import get_logger, register_secret
from .models import TLSSettings, ProxySettings, TunnelEndpoint

logger = get_logger(__name__)


def configure_endpoint(config: Configuration) -> TunnelEndpoint:
    """
    Build tunnel endpoint settings from configuration.
    
    Args:
        config: Merged configuration
    
    Returns:
        TunnelEndpoint with timeouts, TLS and proxy settings
    
    Raises:
        ConfigurationError: If a property has an invalid value
    """
    try:
        endpoint = TunnelEndpoint(
            connect_timeout=config.get_int("webtunnel.connectTimeout", DEFAULT_CONNECT_TIMEOUT),
            remote_timeout=config.get_int("webtunnel.remoteTimeout", DEFAULT_REMOTE_TIMEOUT),
            local_timeout=config.get_int("webtunnel.localTimeout", DEFAULT_LOCAL_TIMEOUT),
            tls=TLSSettings(
                accept_unknown_certificate=config.get_bool("tls.acceptUnknownCertificate", True),
                ciphers=config.get_string("tls.ciphers", DEFAULT_TLS_CIPHERS),
                ca_location=config.get_string("tls.caLocation", ""),
                extended_verification=config.get_bool("tls.extendedCertificateVerification", False),
            ),
            proxy=ProxySettings(
                enable=config.get_bool("http.proxy.enable", False),
                host=config.get_string("http.proxy.host", ""),
                port=config.get_int("http.proxy.port", DEFAULT_PROXY_PORT),
                username=config.get_string("http.proxy.username", ""),
                password=config.get_string("http.proxy.password", ""),
            ),
        )
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
    
    register_secret(endpoint.proxy.password)
    
    if endpoint.proxy.enable and not endpoint.proxy.host:
        logger.warning("HTTP proxy enabled but http.proxy.host is not set; connecting directly")
    
    logger.debug(f"Tunnel endpoint: {endpoint.to_dict()}")
    return endpoint
