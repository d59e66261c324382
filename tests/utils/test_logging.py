import logging

import pytest

from sqlcompat.utils.logging import RunIdFilter, get_logger, get_run_id, set_run_id, time_call


def test_run_id_round_trip():
    token = set_run_id("test-run")
    assert token == "test-run"
    assert get_run_id() == "test-run"


def test_set_run_id_generates_token():
    token = set_run_id()
    assert len(token) == 12
    assert get_run_id() == token


def test_run_id_filter_stamps_records():
    set_run_id("stamped")
    record = logging.LogRecord("sqlcompat.tests", logging.INFO, __file__, 1, "hello", None, None)
    assert RunIdFilter().filter(record)
    assert record.run_id == "stamped"


def test_package_logger_is_configured_once():
    get_logger("tests.once")
    get_logger("tests.twice")
    assert len(logging.getLogger("sqlcompat").handlers) == 1


def test_time_call_logs_duration(caplog):
    logger = get_logger("tests.logging")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("unit-test", logger, statements=3, threshold_ms=0):
        pass
    records = [record for record in caplog.records if record.name == logger.name]
    assert any("unit-test took" in record.getMessage() for record in records)
    assert records[-1].statements == 3
    assert records[-1].levelno == logging.WARNING


def test_time_call_logs_debug_below_threshold_and_on_error(caplog):
    logger = get_logger("tests.timing")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with pytest.raises(RuntimeError):
        with time_call("failing-step", logger, threshold_ms=60_000):
            raise RuntimeError("boom")
    records = [record for record in caplog.records if record.name == logger.name]
    assert records[-1].levelno == logging.DEBUG
    assert "failing-step took" in records[-1].getMessage()
    assert records[-1].statements is None
