"""
Tunnel domain - endpoint settings, channels and local port forwarding
"""
from .models import TLSSettings, ProxySettings, TunnelEndpoint, TunnelSession
from .endpoint import configure_endpoint
from .channel import WebTunnelChannelFactory, webtunnel_url
from .forwarder import LocalPortForwarder, WebTunnelOpener

__all__ = [
    "TLSSettings",
    "ProxySettings",
    "TunnelEndpoint",
    "TunnelSession",
    "configure_endpoint",
    "WebTunnelChannelFactory",
    "webtunnel_url",
    "LocalPortForwarder",
    "WebTunnelOpener",
]
