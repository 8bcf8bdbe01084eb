"""Tests for logging utilities."""

import logging

from rich.logging import RichHandler

from common.logger import get_logger, setup_logging


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_logger_instance(self):
        """Test that get_logger returns a logger instance."""
        logger = get_logger("test")
        assert isinstance(logger, logging.Logger)

    def test_logger_name(self):
        """Test that logger has correct name."""
        logger = get_logger("test.module")
        assert logger.name == "test.module"

    def test_default_level_is_info(self, monkeypatch):
        """Test that default logging level is INFO."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        logger = get_logger("test.default")
        assert logger.level == logging.INFO

    def test_level_from_env(self, monkeypatch):
        """Test that LOG_LEVEL sets the level."""
        monkeypatch.setenv("LOG_LEVEL", "warning")
        logger = get_logger("test.env_level")
        assert logger.level == logging.WARNING

    def test_custom_level(self):
        """Test that custom logging level can be set."""
        logger = get_logger("test.custom", level="DEBUG")
        assert logger.level == logging.DEBUG

    def test_logger_has_rich_handler(self):
        """Test that logger is configured with a rich handler."""
        logger = get_logger("test.handler")
        assert any(isinstance(h, RichHandler) for h in logger.handlers)

    def test_reuses_existing_logger(self):
        """Test that get_logger reuses existing logger instance."""
        logger1 = get_logger("test.reuse")
        logger2 = get_logger("test.reuse")
        assert logger1 is logger2
        assert len(logger1.handlers) == len(logger2.handlers) == 1

    def test_logging_output(self, caplog):
        """Test that logging actually produces output."""
        logger = get_logger("test.output")

        with caplog.at_level(logging.INFO):
            logger.info("Performing create_books")

        assert "Performing create_books" in caplog.text

    def test_info_level_filters_debug(self, caplog):
        """Test that INFO level filters out DEBUG messages."""
        logger = get_logger("test.filter", level="INFO")

        with caplog.at_level(logging.DEBUG):
            logger.debug("This should not appear")
            logger.info("This should appear")

        assert "This should not appear" not in caplog.text
        assert "This should appear" in caplog.text


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_configures_root_logger(self, monkeypatch):
        """Test the root logger gets one rich handler and the level."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            setup_logging(level="warning")

            assert root.level == logging.WARNING
            assert [type(h) for h in root.handlers] == [RichHandler]
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_file_handler(self, tmp_path, monkeypatch):
        """Test log_file adds a file handler."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        log_file = tmp_path / "migrate.log"
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            setup_logging(level="INFO", log_file=str(log_file))
            logging.getLogger("test.file").info("Applied 2 migration(s)")
            for handler in root.handlers:
                handler.flush()

            assert "Applied 2 migration(s)" in log_file.read_text()
        finally:
            for handler in root.handlers:
                if isinstance(handler, logging.FileHandler):
                    handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
