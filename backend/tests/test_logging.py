import logging

from rdmpass.logging_config import SecurityFilter, log_generation_success


def make_record(msg: str) -> logging.LogRecord:
    return logging.LogRecord("rdmpass.test", logging.INFO, __file__, 1, msg, None, None)


def test_filter_redacts_secret_assignments():
    record = make_record("entropy=AAAA")
    SecurityFilter().filter(record)
    assert record.msg == "[REDACTED - Sensitive data filtered]"


def test_filter_keeps_ordinary_messages():
    record = make_record("Derived 16 characters for 127.0.0.1")
    SecurityFilter().filter(record)
    assert record.msg == "Derived 16 characters for 127.0.0.1"


def test_generation_log_carries_no_secret_material(caplog):
    with caplog.at_level(logging.INFO, logger="rdmpass.generation"):
        log_generation_success("127.0.0.1", 16, 62, 1)

    assert "Derived 16 characters for 127.0.0.1" in caplog.text
    assert "password" not in caplog.text.lower()
