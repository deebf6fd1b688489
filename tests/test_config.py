import logging

import pytest

from backoffice import config


@pytest.fixture
def clean_package_logger():
    package_logger = logging.getLogger("backoffice")
    saved = list(package_logger.handlers)
    package_logger.handlers.clear()
    yield package_logger
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers[:] = saved
    package_logger.propagate = True


def test_setup_logging_writes_to_debug_file(tmp_path, monkeypatch, clean_package_logger):
    log_path = tmp_path / "logs" / "debug.log"
    monkeypatch.setattr(config, "DEBUG_LOG_PATH", str(log_path))

    config.setup_logging()
    config.setup_logging()
    logging.getLogger("backoffice.catalog").info("add_item ::: id=1")
    for handler in clean_package_logger.handlers:
        handler.flush()

    assert len(clean_package_logger.handlers) == 1
    assert "add_item ::: id=1" in log_path.read_text(encoding="utf-8")
