import logging
from pathlib import Path
from typing import Optional, Union


class TestRunnerError(Exception):
    """Base class for test runner errors."""
    __test__ = False


class DiscoveryError(TestRunnerError):
    """The test root could not be listed or one of its files could not be read."""
    pass


class ResultSourceError(TestRunnerError):
    """Execution results could not be loaded."""
    pass


class ErrorHandler:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('test_runner.error_handler')

    def log_error(self, error: Exception, file_path: Optional[Union[str, Path]] = None) -> str:
        """
        Log an error that terminates the run.

        Args:
            error: The exception that was raised
            file_path: Optional file or directory the error relates to

        Returns:
            str: The formatted error message
        """
        error_type = type(error).__name__
        message = f"{error_type}: {str(error)}"
        if file_path:
            message += f" | File: {file_path}"

        self.logger.error(message)
        self.logger.debug("Traceback for %s", error_type, exc_info=error)
        return message

