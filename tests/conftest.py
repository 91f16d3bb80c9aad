from typing import Dict, List, Optional, Sequence

import pytest

from wtssh.core.interfaces import (
    ChannelFactory,
    Forwarder,
    PlatformSupport,
    ProcessHandle,
    ProcessLauncher,
    PromptProvider,
    TunnelChannel,
    TunnelOpener,
)


class FakePlatform(PlatformSupport):
    def __init__(self, echo: Optional[bool] = True, executables: Optional[Dict[str, str]] = None):
        self.echo = echo
        self.executables = executables or {}
        self.echo_calls: List[bool] = []

    def get_echo(self):
        return self.echo

    def set_echo(self, enabled):
        self.echo_calls.append(enabled)
        if self.echo is not None:
            self.echo = enabled

    def find_executable(self, name):
        return self.executables.get(name)

    def default_client_names(self):
        return ("ssh", "putty")


class FakePrompts(PromptProvider):
    """Replays scripted lines; None means input unavailable."""

    def __init__(self, lines: Sequence[Optional[str]] = (), platform: Optional[FakePlatform] = None):
        self.lines = list(lines)
        self.platform = platform
        self.written: List[str] = []
        self.echo_during_reads: List[Optional[bool]] = []

    def write(self, text):
        self.written.append(text)

    def read_line(self):
        if self.platform is not None:
            self.echo_during_reads.append(self.platform.echo)
        if not self.lines:
            return None
        line = self.lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line


class FakeHandle(ProcessHandle):
    def __init__(self, rc):
        self.rc = rc

    def wait(self):
        return self.rc


class FakeLauncher(ProcessLauncher):
    def __init__(self, rc: int = 0, error: Optional[OSError] = None):
        self.rc = rc
        self.error = error
        self.calls = []

    def launch(self, executable, arguments):
        self.calls.append((executable, list(arguments)))
        if self.error is not None:
            raise self.error
        return FakeHandle(self.rc)


class FakeForwarder(Forwarder):
    def __init__(self, port):
        self.port = port
        self.remote_timeout = None
        self.local_timeout = None
        self.closed = False

    @property
    def local_port(self):
        return self.port

    def set_remote_timeout(self, timeout):
        self.remote_timeout = timeout

    def set_local_timeout(self, timeout):
        self.local_timeout = timeout

    def close(self):
        self.closed = True


class FakeOpener(TunnelOpener):
    def __init__(self, port: int = 53123, error: Optional[Exception] = None):
        self.port = port
        self.error = error
        self.calls = []
        self.forwarder: Optional[FakeForwarder] = None

    def open(self, local_port, remote_port, uri, channel_factory):
        self.calls.append((local_port, remote_port, uri, channel_factory))
        if self.error is not None:
            raise self.error
        self.forwarder = FakeForwarder(local_port or self.port)
        return self.forwarder


class RecordingChannelFactory(ChannelFactory):
    def __init__(self, username, password, endpoint):
        self.username = username
        self.password = password
        self.endpoint = endpoint

    def create(self, uri, remote_port) -> TunnelChannel:
        raise AssertionError("not used with FakeOpener")


@pytest.fixture
def platform():
    return FakePlatform(executables={"ssh": "/usr/bin/ssh"})


@pytest.fixture
def launcher():
    return FakeLauncher()


@pytest.fixture
def opener():
    return FakeOpener()
