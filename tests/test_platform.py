import io
import os
import sys

import pytest

from wtssh.core.interfaces import PlatformSupport
from wtssh.infrastructure import get_platform

pytestmark = pytest.mark.skipif(os.name == "nt", reason="POSIX terminal")


def test_get_platform():
    platform = get_platform()
    assert isinstance(platform, PlatformSupport)
    assert list(platform.default_client_names()) == ["ssh", "putty"]


def test_echo_is_noop_without_terminal(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("typed\n"))
    platform = get_platform()
    assert platform.get_echo() is None
    platform.set_echo(False)
    platform.set_echo(True)


def test_echo_is_noop_without_stdin(monkeypatch):
    monkeypatch.setattr(sys, "stdin", None)
    platform = get_platform()
    assert platform.get_echo() is None
    platform.set_echo(False)


def test_find_executable(tmp_path, monkeypatch):
    program = tmp_path / "ssh"
    program.write_text("#!/bin/sh\n")
    program.chmod(0o755)
    monkeypatch.setenv("PATH", str(tmp_path))
    platform = get_platform()
    assert platform.find_executable("ssh") == str(program)
    assert platform.find_executable("putty") is None
