from __future__ import annotations

import logging

from src.payroll_hr.payroll_hr.logging_config import PACKAGE_LOGGER, configure_logging


def _own_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, "_payroll_hr_handler", False)]


def test_repeated_calls_do_not_stack_handlers():
    configure_logging("DEBUG")
    logger = configure_logging("WARNING")

    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.WARNING
    assert len(_own_handlers(logger)) == 1


def test_file_handler_is_added(tmp_path):
    log_file = tmp_path / "app.log"
    logger = configure_logging("INFO", log_file=str(log_file))
    try:
        assert len(_own_handlers(logger)) == 2
        logging.getLogger(f"{PACKAGE_LOGGER}.sickness").info("hello")
        for h in logger.handlers:
            h.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
    finally:
        configure_logging("WARNING")


def test_unknown_level_falls_back_to_info():
    assert configure_logging("chatty").level == logging.INFO
    configure_logging("WARNING")
