import logging

import pytest

import bindery
from bindery.constants import LOGGER

log_capture: list[str] = []


class ListLogHandler(logging.Handler):
    def emit(self, record):
        log_capture.append(self.format(record))


@pytest.fixture(autouse=True)
def reset_logging_capture():
    log_capture.clear()


@pytest.fixture(autouse=True)
def fresh_default_container():
    yield bindery.reset()
    bindery.reset()


@pytest.fixture
def container():
    return bindery.Container()


@pytest.fixture
def captured_logs():
    handler = ListLogHandler()
    handler.setFormatter(logging.Formatter("%(name)s %(levelname)s %(message)s"))
    previous = LOGGER.level
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.addHandler(handler)
    try:
        yield log_capture
    finally:
        LOGGER.removeHandler(handler)
        LOGGER.setLevel(previous)
