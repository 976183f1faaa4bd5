"""Unit tests for upm.utils.logger module."""
import logging
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

from upm.utils.logger import get_logger, level_for_flags, setup_logger


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_console_only(self):
        """Console logging adds a single rich handler."""
        logger = setup_logger(name='upm-test-console', log_to_file=False)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_file_logging(self, tmp_path):
        """File logging writes <name>.log into log_dir."""
        logger = setup_logger(name='upm-test-file', log_dir=str(tmp_path), level=logging.INFO,
                              log_to_console=False)
        assert isinstance(logger.handlers[0], RotatingFileHandler)
        logger.info("written to file")
        for handler in logger.handlers:
            handler.flush()
        assert "written to file" in (tmp_path / 'upm-test-file.log').read_text(encoding='utf-8')
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    def test_file_keeps_info_at_default_level(self, tmp_path, capsys):
        """At the default WARNING level INFO still reaches the file but not the console."""
        logger = setup_logger(name='upm-test-default', log_dir=str(tmp_path), no_color=True)
        console, log_file = logger.handlers
        assert console.level == logging.WARNING
        assert log_file.level == logging.INFO
        logger.info("task created")
        log_file.flush()
        assert "task created" in (tmp_path / 'upm-test-default.log').read_text(encoding='utf-8')
        assert "task created" not in capsys.readouterr().err
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    def test_repeated_setup_replaces_handlers(self):
        """Calling setup twice does not duplicate handlers."""
        setup_logger(name='upm-test-twice', log_to_file=False)
        logger = setup_logger(name='upm-test-twice', log_to_file=False, level=logging.DEBUG)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_console_goes_to_stderr(self, capsys):
        """Log lines never mix with command output on stdout."""
        logger = setup_logger(name='upm-test-stderr', log_to_file=False, no_color=True)
        logger.warning("careful")
        captured = capsys.readouterr()
        assert "careful" in captured.err
        assert "careful" not in captured.out

    def test_child_loggers_propagate(self, caplog):
        """Module loggers are children of the 'upm' logger."""
        child = get_logger('upm.core.task')
        with caplog.at_level(logging.INFO, logger='upm'):
            child.info("child message")
        assert "child message" in caplog.text


class TestLevelForFlags:
    """Tests for level_for_flags."""

    def test_default_is_warning(self):
        assert level_for_flags() == logging.WARNING

    def test_verbose_wins(self):
        assert level_for_flags(verbose=True, quiet=True) == logging.DEBUG

    def test_quiet(self):
        assert level_for_flags(quiet=True) == logging.ERROR
