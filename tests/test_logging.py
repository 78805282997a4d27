"""Tests for the process logging setup."""

import logging

import pytest

from salon_booking.utils.my_logging import setup_logging

TOUCHED = ["uvicorn.access", "sqlalchemy.engine", "sqlalchemy.pool", "sqlalchemy", "celery", "uvicorn"]


@pytest.fixture(autouse=True)
def restore_loggers():
    saved = {name: (logging.getLogger(name).level, logging.getLogger(name).propagate) for name in TOUCHED}
    yield
    for name, (level, propagate) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = propagate


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_access_log_is_muted(self):
        """Should keep uvicorn's per-request lines out of the log."""
        setup_logging()
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_sql_echo_off_outside_debug(self):
        """Should keep SQL statements and pool events quiet when DEBUG is off."""
        setup_logging()
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.pool").level == logging.WARNING

    def test_quiet_mode_only_reports_library_errors(self):
        """Should raise library loggers to ERROR and stop propagation."""
        setup_logging(verbose=False)
        for name in ("sqlalchemy", "celery", "uvicorn"):
            logger = logging.getLogger(name)
            assert logger.level == logging.ERROR
            assert logger.propagate is False
