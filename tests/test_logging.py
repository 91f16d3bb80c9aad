import logging

from wtssh.core.logging import REDACTED, SecretRedactionFilter, register_secret


def _record(msg, *args):
    return logging.LogRecord("wtssh", logging.INFO, __file__, 1, msg, args, None)


def test_registered_secret_is_masked():
    register_secret("hunter2-xyz")
    record = _record("connecting with %s as %s", "hunter2-xyz", "alice")

    assert SecretRedactionFilter().filter(record) is True
    message = record.getMessage()
    assert "hunter2-xyz" not in message
    assert REDACTED in message
    assert "alice" in message


def test_unrelated_messages_untouched():
    register_secret("hunter2-xyz")
    record = _record("port %d", 22)
    SecretRedactionFilter().filter(record)
    assert record.args == (22,)
    assert record.getMessage() == "port 22"


def test_empty_secret_ignored():
    register_secret("")
    record = _record("nothing here")
    SecretRedactionFilter().filter(record)
    assert record.getMessage() == "nothing here"
