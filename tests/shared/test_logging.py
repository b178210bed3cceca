"""Tests for logging setup"""

import logging

import pytest
from pydantic import ValidationError

from src.infrastructure.config.settings import Settings
from src.shared.telemetry.logging import (LIBRARY_LOGGERS, resolve_level,
                                          setup_logging)


@pytest.fixture(autouse=True)
def restore_levels():
    names = ("", *LIBRARY_LOGGERS)
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_level_follows_debug_flag():
    assert resolve_level(Settings()) == logging.INFO
    assert resolve_level(Settings(debug=True)) == logging.DEBUG


def test_explicit_level_wins():
    settings = Settings(debug=True, log_level="warning")

    assert settings.log_level == "WARNING"
    assert resolve_level(settings) == logging.WARNING


def test_unknown_level_is_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_setup_quiets_library_loggers():
    level = setup_logging(Settings())

    assert level == logging.INFO
    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert logging.getLogger("redis").level == logging.WARNING


def test_database_echo_keeps_sqlalchemy_level():
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    setup_logging(Settings(database_echo=True))

    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
