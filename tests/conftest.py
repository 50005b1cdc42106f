from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from kube_console.runtime.telemetry import DEFAULT_LOGGER_NAME


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def log_records() -> Iterator[List[logging.LogRecord]]:
    """Records emitted under the package logger while the test runs."""

    logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    handler = _ListHandler()
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler.records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
