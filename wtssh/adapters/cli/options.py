"""
Command line option table
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import typer

from ...domain.session.models import SessionOptions


@dataclass(frozen=True)
class OptionSpec:
    """One command line option: parameter name, validator and applier"""
    name: str
    flag: str
    validator: Optional[Callable[[Any], None]]
    applier: Callable[[SessionOptions, Any], None]


def validate_port(value: int) -> None:
    if not (1 <= value <= 65535):
        raise ValueError(f"{value} is not in the range 1 to 65535")


def validate_define(value: List[str]) -> None:
    for definition in value:
        if not definition or definition.startswith("="):
            raise ValueError(f"invalid property definition {definition!r}, expected name=value")


def _set(attribute: str) -> Callable[[SessionOptions, Any], None]:
    def applier(options: SessionOptions, value: Any) -> None:
        setattr(options, attribute, value)
    return applier


def _set_credential(attribute: str) -> Callable[[SessionOptions, Any], None]:
    def applier(options: SessionOptions, value: Any) -> None:
        setattr(options.credentials, attribute, value)
    return applier


def _extend(attribute: str) -> Callable[[SessionOptions, Any], None]:
    def applier(options: SessionOptions, value: Any) -> None:
        getattr(options, attribute).extend(value)
    return applier


OPTION_TABLE = (
    OptionSpec("help_requested", "--help", None, _set("help_requested")),
    OptionSpec("config_file", "--config-file", None, _extend("config_files")),
    OptionSpec("ssh_client", "--ssh-client", None, _set("ssh_client")),
    OptionSpec("scp", "--scp", None, _set("use_scp")),
    OptionSpec("local_port", "--local-port", validate_port, _set("local_port")),
    OptionSpec("remote_port", "--remote-port", validate_port, _set("remote_port")),
    OptionSpec("username", "--username", None, _set_credential("username")),
    OptionSpec("password", "--password", None, _set_credential("password")),
    OptionSpec("login_name", "--login-name", None, _set_credential("login_name")),
    OptionSpec("define", "--define", validate_define, _extend("defines")),
)


def apply_options(options: SessionOptions, values: Dict[str, Any]) -> SessionOptions:
    """
    Validate and apply parsed option values.
    
    Options that were not given (None, False or empty) are skipped.
    
    Raises:
        typer.BadParameter: If a value fails validation
    """
    for spec in OPTION_TABLE:
        value = values.get(spec.name)
        if value is None or value is False or value == [] or value == ():
            continue
        if spec.validator is not None:
            try:
                spec.validator(value)
            except ValueError as e:
                raise typer.BadParameter(str(e), param_hint=f"'{spec.flag}'") from e
        spec.applier(options, list(value) if isinstance(value, tuple) else value)
    return options


def split_positionals(arguments: Optional[List[str]]) -> tuple[Optional[str], List[str]]:
    """
    Split positional tokens into the remote URI and passthrough arguments.
    
    A ``--`` directly after the URI separates the client options and is
    dropped.
    """
    tokens = list(arguments or [])
    if not tokens:
        return None, []
    uri, rest = tokens[0], tokens[1:]
    if rest and rest[0] == "--":
        rest = rest[1:]
    return uri, rest

