"""
Logging utilities for the LaTeX to HTML compiler.

Handles the ``[logging]`` config section: ``level``, ``format``, ``console``,
``console-level``, ``file``, ``file-level``, ``rotate`` and per-logger
``[logging.logger.NAME]`` tables with the same keys.
"""
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROTATE_BACKUP_COUNT = 7


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string."""
    level = getattr(logging, str(levelStr).upper(), None)
    if not isinstance(level, int):
        logger.error(f"Invalid log level '{levelStr}'")
        return default
    return level


def _handlerLevel(config: Dict[str, Any], key: str, fallback: int) -> int:
    """Level for a single handler, falls back to the logger level."""
    if key not in config:
        return fallback
    level = getLogLevelByStr(config[key], fallback)
    return fallback if level is None else level


def _createFileHandler(logFile: str, rotate: bool) -> logging.Handler:
    """Create file handler, rotating at midnight when requested."""
    Path(logFile).parent.mkdir(parents=True, exist_ok=True)
    if rotate:
        return TimedRotatingFileHandler(
            filename=logFile,
            when="midnight",
            backupCount=ROTATE_BACKUP_COUNT,
            encoding="utf-8",
        )
    return logging.FileHandler(logFile, encoding="utf-8")


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Replace handlers of given logger with ones described by config."""
    if "level" in config:
        level = getLogLevelByStr(config["level"])
        if level is not None:
            localLogger.setLevel(level)
    loggerLevel = localLogger.getEffectiveLevel()

    for handler in localLogger.handlers[:]:
        localLogger.removeHandler(handler)

    formatter = logging.Formatter(config.get("format", DEFAULT_LOG_FORMAT))
    handlers = []

    if config.get("console", False):
        handlers.append((logging.StreamHandler(), _handlerLevel(config, "console-level", loggerLevel)))

    if "file" in config:
        try:
            fileHandler = _createFileHandler(config["file"], bool(config.get("rotate", False)))
            handlers.append((fileHandler, _handlerLevel(config, "file-level", loggerLevel)))
        except OSError as e:
            logger.error(f"Failed to setup file logging for {localLogger.name}: {e}")

    for handler, level in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        localLogger.addHandler(handler)
        logger.debug(f"Logger {localLogger.name}: added {type(handler).__name__}, logLevel: {level}")


def initLogging(config: Dict[str, Any]) -> None:
    """Configure root logger and named loggers from the [logging] config section."""
    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.WARNING)
    configureLogger(rootLogger, config)

    for loggerName, loggerConfig in config.get("logger", {}).items():
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.debug(f"Logging configured: root level={rootLogger.getEffectiveLevel()}")
