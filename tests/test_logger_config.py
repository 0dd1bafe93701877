import logging

import pytest

from loggers.config import DEFAULT_LOG_LEVELS, configure_loggers


@pytest.fixture
def restore_levels():
    names = [f"loggers.{name}_logger" for name in DEFAULT_LOG_LEVELS]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_defaults(restore_levels):
    configure_loggers()
    assert logging.getLogger("loggers.pot_logger").level == logging.INFO


def test_level_names_and_constants(restore_levels):
    configure_loggers({"pot": "debug", "betting": logging.WARNING})

    assert logging.getLogger("loggers.pot_logger").level == logging.DEBUG
    assert logging.getLogger("loggers.betting_logger").level == logging.WARNING
    assert logging.getLogger("loggers.table_logger").level == logging.INFO


def test_unknown_level_name(restore_levels):
    with pytest.raises(ValueError):
        configure_loggers({"pot": "LOUD"})
