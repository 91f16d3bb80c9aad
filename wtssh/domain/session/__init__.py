"""
Session domain - credentials, client selection, arguments and handoff
"""
from .models import Credentials, ClientVariant, ClientSpec, SessionOptions
from .credentials import CredentialStore, no_echo
from .client import classify_client, select_client
from .arguments import synthesize_arguments
from .handoff import hand_off
from .service import SessionService

__all__ = [
    "Credentials",
    "ClientVariant",
    "ClientSpec",
    "SessionOptions",
    "CredentialStore",
    "no_echo",
    "classify_client",
    "select_client",
    "synthesize_arguments",
    "hand_off",
    "SessionService",
]
