"""
Main CLI application
"""
import typer
from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from ...core.constants import (
    EXIT_OK,
    EXIT_NOINPUT,
    EXIT_UNAVAILABLE,
    EXIT_SOFTWARE,
    EXIT_OSERR,
    EXIT_CONFIG,
    EXIT_INTERRUPTED,
)
from ...core.exceptions import (
    ConfigurationError,
    PromptError,
    TunnelOpenError,
    ProcessLaunchError,
)
from ...core.logging import setup_logging, get_logger, get_stderr_console, get_stdout_console
from ...domain.session import SessionOptions, SessionService
from ...domain.tunnel import WebTunnelOpener
from ...infrastructure import get_platform, SubprocessLauncher
from ..config.loader import ConfigLoader
from .options import apply_options, split_positionals
from .prompts import ConsolePromptProvider

logger = get_logger(__name__)
stdout_console = get_stdout_console()
stderr_console = get_stderr_console()

USAGE = "OPTIONS <Remote-URI> [-- SSH-OPTIONS]"

# Error type -> (exit code, message label)
ERROR_EXIT_CODES = (
    (ConfigurationError, EXIT_CONFIG, "Configuration error"),
    (PromptError, EXIT_NOINPUT, "Error"),
    (TunnelOpenError, EXIT_UNAVAILABLE, "Tunnel error"),
    (ProcessLaunchError, EXIT_OSERR, "Launch error"),
)

app = typer.Typer(
    name="wtssh",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={
        "help_option_names": [],
        "allow_interspersed_args": False,
    },
)


def build_service() -> SessionService:
    """Create the session service with the real collaborators"""
    platform = get_platform()
    return SessionService(
        platform=platform,
        prompts=ConsolePromptProvider(),
        launcher=SubprocessLauncher(),
        opener=WebTunnelOpener(),
    )


def run_session(
    options: SessionOptions,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> int:
    """
    Load configuration and run the session, mapping failures to exit codes.
    
    The ``logging.level`` property applies unless a level was given on the
    command line.
    """
    try:
        options.config = ConfigLoader().load(options.config_files, options.defines)
        configured_level = options.config.get_string("logging.level", "")
        if log_level is None and configured_level:
            setup_logging(level=configured_level, log_file=log_file)
        return build_service().run(options)
    except KeyboardInterrupt:
        stdout_console.print()
        return EXIT_INTERRUPTED
    except Exception as e:
        for error_type, code, label in ERROR_EXIT_CODES:
            if isinstance(e, error_type):
                logger.debug(f"{label}: {e}")
                stderr_console.print(f"[red]{label}:[/red] {escape(str(e))}", highlight=False)
                return code
        logger.exception("Unexpected failure")
        stderr_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return EXIT_SOFTWARE


@app.command(
    help=(
        "Remote Manager SSH Client.\n\n"
        "Launches a SSH connection to a remote host via the Remote Manager server.\n\n"
        "<Remote-URI> specifies the URI of the remote device via the Remote Manager "
        "server, e.g. https://8ba57423-ec1a-4f31-992f-a66c240cbfa0.my-devices.net\n\n"
        f"Usage: wtssh {USAGE}"
    ),
)
def main(
    ctx: typer.Context,
    arguments: Optional[List[str]] = typer.Argument(
        None, metavar="<Remote-URI> [-- SSH-OPTIONS]", show_default=False,
    ),
    help: bool = typer.Option(
        False, "--help", "-h",
        help="Display help information on command line arguments.",
    ),
    config_file: Optional[List[Path]] = typer.Option(
        None, "--config-file", "-c", metavar="file",
        help="Load configuration data from a file.",
    ),
    ssh_client: Optional[str] = typer.Option(
        None, "--ssh-client", "-C", metavar="program",
        help="Specify the name of the SSH client executable (default: ssh or putty).",
    ),
    scp: bool = typer.Option(
        False, "--scp",
        help="Use scp as SSH client for copying files between local host and target.",
    ),
    local_port: Optional[int] = typer.Option(
        None, "--local-port", "-L", metavar="port",
        help="Specify local port number (default: ephemeral).",
    ),
    remote_port: Optional[int] = typer.Option(
        None, "--remote-port", "-R", metavar="port",
        help="Specify remote port number (default: SSH/22).",
    ),
    username: Optional[str] = typer.Option(
        None, "--username", "-u", metavar="username",
        help="Specify username for Remote Manager server.",
    ),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", metavar="password",
        help="Specify password for Remote Manager server.",
    ),
    login_name: Optional[str] = typer.Option(
        None, "--login-name", "-l", metavar="username",
        help="Specify remote (SSH) login name.",
    ),
    define: Optional[List[str]] = typer.Option(
        None, "--define", "-D", metavar="name=value",
        help="Define or override a configuration property.",
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file",
        help="Log file path.",
    ),
):
    setup_logging(level=log_level or "WARNING", log_file=log_file)
    
    options = apply_options(SessionOptions(), {
        "help_requested": help,
        "config_file": config_file,
        "ssh_client": ssh_client,
        "scp": scp,
        "local_port": local_port,
        "remote_port": remote_port,
        "username": username,
        "password": password,
        "login_name": login_name,
        "define": define,
    })
    options.uri, options.passthrough = split_positionals(arguments)
    
    if options.help_requested or not options.uri:
        typer.echo(ctx.get_help())
        raise typer.Exit(EXIT_OK)
    
    raise typer.Exit(run_session(options, log_level, log_file))


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
