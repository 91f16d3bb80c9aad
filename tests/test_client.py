import pytest

from wtssh.core.config import Configuration
from wtssh.core.exceptions import ConfigurationError, NoClientError
from wtssh.domain.session import ClientVariant, SessionOptions, classify_client, select_client

from conftest import FakePlatform


@pytest.mark.parametrize("name,variant", [
    ("ssh", ClientVariant.SSH),
    ("scp", ClientVariant.SCP),
    ("SCP.EXE", ClientVariant.SCP),
    ("/opt/bin/scp2", ClientVariant.SCP),
    ("putty.exe", ClientVariant.PUTTY),
    ("PuTTYtel", ClientVariant.PUTTY),
    ("/usr/bin/ssh", ClientVariant.SSH),
    ("/home/scpuser/bin/ssh", ClientVariant.SSH),
])
def test_classify_by_base_name(name, variant):
    assert classify_client(name) is variant


def test_explicit_client_overrides_everything():
    options = SessionOptions(
        ssh_client="putty",
        use_scp=True,
        config=Configuration({"ssh.executable": "/opt/ssh"}),
    )
    spec = select_client(options, FakePlatform(executables={"ssh": "/usr/bin/ssh"}))
    assert spec.executable_path == "putty"
    assert spec.variant is ClientVariant.PUTTY


def test_scp_flag_forces_scp():
    options = SessionOptions(use_scp=True, config=Configuration({"ssh.executable": "/opt/ssh"}))
    spec = select_client(options, FakePlatform())
    assert spec.executable_path == "scp"
    assert spec.variant is ClientVariant.SCP


def test_configured_executable_before_path_search():
    options = SessionOptions(config=Configuration({"ssh.executable": "/opt/ssh"}))
    spec = select_client(options, FakePlatform(executables={"ssh": "/usr/bin/ssh"}))
    assert spec.executable_path == "/opt/ssh"


def test_path_search_prefers_ssh():
    platform = FakePlatform(executables={"ssh": "/usr/bin/ssh", "putty": "/usr/bin/putty"})
    assert select_client(SessionOptions(), platform).executable_path == "/usr/bin/ssh"


def test_path_search_falls_back_to_putty():
    platform = FakePlatform(executables={"putty": "/usr/bin/putty"})
    spec = select_client(SessionOptions(), platform)
    assert spec.executable_path == "/usr/bin/putty"
    assert spec.variant is ClientVariant.PUTTY


def test_no_client_is_a_configuration_error():
    with pytest.raises(NoClientError) as excinfo:
        select_client(SessionOptions(), FakePlatform())
    assert isinstance(excinfo.value, ConfigurationError)
    assert "ssh.executable" in str(excinfo.value)
