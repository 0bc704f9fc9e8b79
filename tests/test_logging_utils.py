"""
Tests for lib/logging_utils.py
"""

import logging
from logging.handlers import TimedRotatingFileHandler

from lib.logging_utils import configureLogger, getLogLevelByStr, initLogging


class TestGetLogLevelByStr:
    """Test log level name resolution."""

    def testKnownLevels(self):
        """Test known level names in any case."""
        assert getLogLevelByStr("debug") == logging.DEBUG
        assert getLogLevelByStr("WARNING") == logging.WARNING
        assert getLogLevelByStr("Error") == logging.ERROR

    def testUnknownLevelReturnsDefault(self):
        """Test fallback for unknown level names."""
        assert getLogLevelByStr("chatty") is None
        assert getLogLevelByStr("chatty", logging.INFO) == logging.INFO

    def testNonLevelAttribute(self):
        """Test that logging module attributes which are not levels are rejected."""
        assert getLogLevelByStr("basicConfig", logging.WARNING) == logging.WARNING


class TestConfigureLogger:
    """Test configuring individual loggers."""

    def testConsoleHandler(self):
        """Test console handler with its own level."""
        localLogger = logging.getLogger("test.latex2html.console")
        configureLogger(localLogger, {"level": "DEBUG", "console": True, "console-level": "ERROR"})

        assert localLogger.level == logging.DEBUG
        assert len(localLogger.handlers) == 1
        assert localLogger.handlers[0].level == logging.ERROR

        configureLogger(localLogger, {})
        assert localLogger.handlers == []

    def testFileHandler(self, tmp_path):
        """Test plain file handler writes messages."""
        logFile = tmp_path / "logs" / "compiler.log"
        localLogger = logging.getLogger("test.latex2html.file")
        configureLogger(localLogger, {"level": "DEBUG", "file": str(logFile), "file-level": "INFO"})

        localLogger.debug("token stream")
        localLogger.info("compiled document")
        for handler in localLogger.handlers:
            handler.flush()

        content = logFile.read_text(encoding="utf-8")
        assert "compiled document" in content
        assert "token stream" not in content

        for handler in localLogger.handlers[:]:
            localLogger.removeHandler(handler)
            handler.close()

    def testRotatingFileHandler(self, tmp_path):
        """Test rotating file handler selection."""
        localLogger = logging.getLogger("test.latex2html.rotate")
        configureLogger(localLogger, {"file": str(tmp_path / "r.log"), "rotate": True})

        assert isinstance(localLogger.handlers[0], TimedRotatingFileHandler)

        for handler in localLogger.handlers[:]:
            localLogger.removeHandler(handler)
            handler.close()


class TestInitLogging:
    """Test root logging setup."""

    def testPerLoggerOverrides(self):
        """Test that [logging.logger.NAME] sections configure named loggers."""
        initLogging({"level": "ERROR", "logger": {"test.latex2html.named": {"level": "DEBUG"}}})

        assert logging.getLogger().level == logging.ERROR
        assert logging.getLogger("test.latex2html.named").level == logging.DEBUG
