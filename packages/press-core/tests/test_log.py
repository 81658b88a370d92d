import logging

import pytest
from press_core.codebase.log import LOGGER_ROOT, configure_logger, trace_stage


class _Stage:
    name = "posts"

    @trace_stage
    def run(self, value):
        return value * 2

    @trace_stage
    def explode(self):
        raise RuntimeError("boom")


@pytest.fixture
def trace_on(monkeypatch):
    monkeypatch.setenv("PRESS_SYNC_TRACE", "1")


def test_trace_silent_by_default(monkeypatch, caplog):
    monkeypatch.delenv("PRESS_SYNC_TRACE", raising=False)
    with caplog.at_level(logging.DEBUG, logger=f"{LOGGER_ROOT}.trace"):
        assert _Stage().run(2) == 4
    assert caplog.records == []


def test_trace_names_stage_and_owner(trace_on, caplog):
    with caplog.at_level(logging.DEBUG, logger=f"{LOGGER_ROOT}.trace"):
        assert _Stage().run(3) == 6
    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "Entering _Stage.run[posts]"
    assert messages[1].startswith("Exiting _Stage.run[posts] after ")


def test_trace_logs_failure_and_reraises(trace_on, caplog):
    with caplog.at_level(logging.DEBUG, logger=f"{LOGGER_ROOT}.trace"):
        with pytest.raises(RuntimeError, match="boom"):
            _Stage().explode()
    assert caplog.records[-1].getMessage().startswith("Failed _Stage.explode[posts]")


def test_configure_logger_is_idempotent():
    logger = logging.getLogger(LOGGER_ROOT)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    logger.handlers = []
    try:
        configure_logger(logging.DEBUG)
        configure_logger(logging.INFO)
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO
    finally:
        logger.handlers = saved_handlers
        logger.setLevel(saved_level)
