# tests/unit/test_logs.py

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from propextract.core.logs import PACKAGE_LOGGER, configure_logging, debug_enabled


def _clear():
    logger = logging.getLogger(PACKAGE_LOGGER)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()


def test_debug_flag_from_env(monkeypatch):
    assert debug_enabled() is False
    monkeypatch.setenv("PROPX_DEBUG", "true")
    assert debug_enabled() is True


def test_quiet_configuration_has_no_file_handler():
    _clear()
    logger = configure_logging(debug=False)
    assert logger.level == logging.INFO
    assert not any(isinstance(h, RotatingFileHandler) for h in logger.handlers)


def test_debug_configuration_writes_rotating_log(tmp_path):
    _clear()
    log_path = tmp_path / "logs" / "run.log"
    logger = configure_logging(debug=True, log_path=log_path)
    assert logger.level == logging.DEBUG
    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)

    logging.getLogger("propextract.core.blob").debug("hello from the locator")
    for h in logger.handlers:
        h.flush()
    assert "hello from the locator" in log_path.read_text(encoding="utf-8")


def test_configure_is_idempotent():
    _clear()
    first = configure_logging(debug=False)
    n = len(first.handlers)
    configure_logging(debug=False)
    assert len(first.handlers) == n
