#!/usr/bin/env python3
import logging

import pytest

from wonzimer.core.log import configure_logging


@pytest.fixture
def wonzimer_logger():
    logger = logging.getLogger("wonzimer")
    saved_level, saved_handlers = logger.level, list(logger.handlers)
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def test_configure_logging_sets_level_and_single_handler(wonzimer_logger):
    configure_logging("debug")
    configure_logging(" WARNING ")
    assert wonzimer_logger.level == logging.WARNING
    assert len(wonzimer_logger.handlers) == 1


def test_configure_logging_accepts_int_levels(wonzimer_logger):
    configure_logging(logging.ERROR)
    assert wonzimer_logger.level == logging.ERROR


def test_configure_logging_rejects_unknown_level(wonzimer_logger):
    with pytest.raises(ValueError, match="Unknown log level 'LOUD'"):
        configure_logging("LOUD")
