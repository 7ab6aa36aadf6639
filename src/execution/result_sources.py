"""
Execution result sources.

The runner discovers tests but does not execute them. A result source turns a
(suite, method) pair into a TestResult: either a placeholder stub or results
recorded by a real test runner.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Tuple

from discovery.catalog_builder import TestCatalog
from execution.results import ResultStatus, TestResult
from handlers.error_handler import ResultSourceError
from utils.config_manager import ConfigurationError, parse_structured_text


class ResultSource(ABC):
    """Supplies the execution result of each discovered test method."""

    @abstractmethod
    def get_result(self, suite: str, method: str) -> TestResult:
        """
        Get the result for one test method.

        Args:
            suite: Suite identifier
            method: Test method name

        Returns:
            TestResult for the method
        """

    def execute(self, catalog: TestCatalog) -> List[TestResult]:
        """
        Collect results for every method of the catalog, in catalog order.

        Args:
            catalog: Suite identifier to method names mapping

        Returns:
            List[TestResult]: One result per listed method
        """
        results = []
        for suite, methods in catalog.items():
            for method in methods:
                results.append(self.get_result(suite, method))
        return results


class StubResultSource(ResultSource):
    """
    Placeholder that reports every method as passed.

    No test is executed; the assertion count and duration are fixed values.
    """

    def __init__(self, assertions: int = 1, time: float = 0.0):
        self.assertions = assertions
        self.time = time
        self.logger = logging.getLogger('test_runner.result_sources')

    def execute(self, catalog: TestCatalog) -> List[TestResult]:
        self.logger.warning("No execution results supplied; reporting placeholder results")
        return super().execute(catalog)

    def get_result(self, suite: str, method: str) -> TestResult:
        return TestResult(suite, method, self.assertions, self.time, ResultStatus.PASS)


class RecordedResultSource(ResultSource):
    """
    Results recorded by a real test runner.

    Records are mappings with ``suite``, ``method`` (or ``test``),
    ``assertions``, ``time``, ``status`` and an optional ``message``. A
    discovered method with no record is reported as failed.
    """

    MISSING_MESSAGE = "No result recorded"

    def __init__(self, records: List[Dict[str, Any]]):
        """
        Args:
            records: Result records as loaded from a results file

        Raises:
            ResultSourceError: If a record is malformed
        """
        self.logger = logging.getLogger('test_runner.result_sources')
        self.results: Dict[Tuple[str, str], TestResult] = {}

        for index, record in enumerate(records):
            result = self._parse_record(record, index)
            self.results[(result.suite, result.method)] = result

        self.logger.info(f"Loaded {len(self.results)} recorded result(s)")

    @classmethod
    def from_file(cls, results_file: str) -> 'RecordedResultSource':
        """
        Load records from a JSON or YAML file.

        The file holds either a list of records or a mapping with a
        ``results`` list.

        Raises:
            ResultSourceError: If the file is missing, unreadable or malformed
        """
        path = Path(results_file)
        if not path.is_file():
            raise ResultSourceError(f"Results file not found: {results_file}")

        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ResultSourceError(f"Cannot load results file {results_file}: {e}") from e

        return cls.from_text(text, path.suffix, results_file)

    @classmethod
    def from_text(cls, text: str, suffix: str = '', source: str = '<string>') -> 'RecordedResultSource':
        """
        Load records from JSON or YAML text, such as an uploaded results file.

        Args:
            text: File content
            suffix: File suffix used to pick the format
            source: Name used in error messages

        Raises:
            ResultSourceError: If the text is malformed or holds no result list
        """
        try:
            data = parse_structured_text(text, suffix, source)
        except ConfigurationError as e:
            raise ResultSourceError(f"Cannot load results file {source}: {e}") from e

        if isinstance(data, dict):
            data = data.get('results')
        if not isinstance(data, list):
            raise ResultSourceError(f"Results file must contain a list of results: {source}")

        return cls(data)

    def _parse_record(self, record: Any, index: int) -> TestResult:
        if not isinstance(record, dict):
            raise ResultSourceError(f"Result #{index} is not a mapping")

        method = record.get('method', record.get('test'))
        if not record.get('suite') or not method:
            raise ResultSourceError(f"Result #{index} needs 'suite' and 'method'")

        try:
            return TestResult(
                suite=str(record['suite']),
                method=str(method),
                assertions=int(record.get('assertions', 0)),
                time=float(record.get('time', 0.0)),
                status=record.get('status', ResultStatus.PASS),
                failure_message=record.get('message'),
            )
        except (TypeError, ValueError) as e:
            raise ResultSourceError(f"Result #{index} is invalid: {e}") from e

    def get_result(self, suite: str, method: str) -> TestResult:
        result = self.results.get((suite, method))
        if result is None:
            self.logger.warning(f"No recorded result for {suite}::{method}")
            return TestResult(suite, method, status=ResultStatus.FAIL, failure_message=self.MISSING_MESSAGE)
        return result
