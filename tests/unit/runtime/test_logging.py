"""Unit tests for logging configuration."""

import logging
from pathlib import Path

import pytest
from loguru import logger

from diary.runtime.config.config_data import ConfigData
from diary.runtime.logging import configure_logging


@pytest.fixture
def restore_loguru():
    yield
    logger.remove()
    logger.add(lambda message: None)


class TestConfigureLogging:
    def test_writes_to_file(self, tmp_path: Path, restore_loguru):
        """Should send loguru and stdlib records to the configured file."""
        config = ConfigData()
        config.logging.file = str(tmp_path / "logs" / "diary.log")
        config.logging.level = "DEBUG"

        configure_logging(config)
        logger.info("hello from loguru")
        logging.getLogger("some.library").warning("hello from stdlib")
        logger.complete()

        content = (tmp_path / "logs" / "diary.log").read_text()
        assert "hello from loguru" in content
        assert "hello from stdlib" in content

    def test_json_format(self, tmp_path: Path, restore_loguru):
        config = ConfigData()
        config.logging.file = str(tmp_path / "diary.json")
        config.logging.format = "json"

        configure_logging(config)
        logger.info("structured")
        logger.complete()

        content = (tmp_path / "diary.json").read_text()
        assert '"message": "structured"' in content

    def test_sqlalchemy_is_quiet(self, restore_loguru):
        config = ConfigData()
        config.logging.file = ""

        configure_logging(config)

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
