"""
Logging Handler for the Dynamic Test Runner.

Log records go to stderr, and optionally to a log file, so that stdout
carries only the test report.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def detach_handlers(logger: logging.Logger) -> None:
    """Remove and close every handler of a logger, releasing open log files."""
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


class LoggingHandler:
    """
    Configures the ``test_runner`` logger shared by every pipeline stage.
    """

    LOGGER_NAME = 'test_runner'

    def __init__(self, log_level: str = "WARNING", log_file: Optional[str] = None):
        """
        Args:
            log_level: Logging level name; unknown names fall back to WARNING
            log_file: Optional log file path, its directory is created on setup
        """
        self.configure(log_level, log_file)

    def configure(self, log_level: str, log_file: Optional[str] = None) -> None:
        """Change the settings; they take effect on the next setup_logging call."""
        self.log_level = getattr(logging, log_level.upper(), logging.WARNING)
        self.log_file = log_file
        self.logger = None

    def _build_handlers(self) -> List[logging.Handler]:
        handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

        if self.log_file:
            Path(self.log_file).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(self.log_file, encoding='utf-8'))

        formatter = logging.Formatter(LOG_FORMAT)
        for handler in handlers:
            handler.setLevel(self.log_level)
            handler.setFormatter(formatter)
        return handlers

    def setup_logging(self) -> logging.Logger:
        """
        Attach fresh handlers to the runner logger.

        Handlers from an earlier setup are closed first.

        Returns:
            Configured logger instance
        """
        logger = logging.getLogger(self.LOGGER_NAME)
        logger.setLevel(self.log_level)
        detach_handlers(logger)

        for handler in self._build_handlers():
            logger.addHandler(handler)

        self.logger = logger
        return logger

    def get_logger(self) -> logging.Logger:
        if self.logger is None:
            return self.setup_logging()
        return self.logger


# Global logging handler instance
_logging_handler = None

def get_logging_handler(log_level: str = "WARNING", log_file: Optional[str] = None) -> LoggingHandler:
    """
    Get the global logging handler instance.

    A later call with different settings reconfigures the shared handler.

    Args:
        log_level: Logging level
        log_file: Optional log file path

    Returns:
        LoggingHandler instance
    """
    global _logging_handler

    if _logging_handler is None:
        _logging_handler = LoggingHandler(log_level, log_file)
    else:
        _logging_handler.configure(log_level, log_file)

    return _logging_handler
