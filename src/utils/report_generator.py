"""
Report Generator Utility
Renders the console test report and its summary figures
"""

import logging
import sys
from typing import Any, Dict, List, Optional, TextIO

from discovery.catalog_builder import TestCatalog
from execution.results import TestResult

SEPARATOR = '─' * 57
PASS_MARK = '✓'
FAIL_MARK = '✗'
DEFAULT_FAILURE_LINES = ['Expected: <!DOCTYPE html>', 'To contain: Result: 1']


def format_seconds(value: float) -> str:
    """Render a duration with at most two decimals and no trailing zeros (0.05, 0.1, 1)."""
    text = '%.2f' % value
    return text.rstrip('0').rstrip('.')


class ReportGenerator:
    """
    Writes the fixed-format test report.

    The layout (banner, suite headers, per-method lines padded to a fixed
    column, summary block, failure details) is consumed by log scrapers, so
    every line is produced exactly as documented.
    """

    def __init__(self, stream: Optional[TextIO] = None, line_width: int = 120, mark_failures: bool = False):
        """
        Initialize the report generator

        Args:
            stream: Output stream, stdout when omitted
            line_width: Column at which durations are printed
            mark_failures: Print FAIL headers and cross marks for failed methods;
                by default every suite header reads PASS and every method a check mark
        """
        self.stream = stream
        self.line_width = line_width
        self.mark_failures = mark_failures
        self.logger = logging.getLogger('test_runner.report_generator')

    def _line(self, text: str = '') -> None:
        print(text, file=self.stream or sys.stdout)

    def render(self, catalog: TestCatalog, results: List[TestResult]) -> Dict[str, Any]:
        """
        Write the full report for one run

        Args:
            catalog: Filtered catalog (its size is announced in the banner)
            results: Execution results in report order

        Returns:
            Dict[str, Any]: The summary figures that were printed
        """
        self.render_banner(catalog)
        self.render_suites(results)
        summary = self.summarize(results)
        self.render_summary(summary, results)
        return summary

    def render_banner(self, catalog: TestCatalog) -> None:
        self._line(f"Found {len(catalog)} test suite(s). Running...")

    def render_suites(self, results: List[TestResult]) -> None:
        """Write a header per suite followed by one line per method."""
        for suite, suite_results in self._group_by_suite(results):
            failed = self.mark_failures and not all(result.passed for result in suite_results)
            status = 'FAIL' if failed else 'PASS'
            self._line(f"{status}  {suite}")

            for result in suite_results:
                self._line(self.format_method_line(result))

    def format_method_line(self, result: TestResult) -> str:
        mark = FAIL_MARK if self.mark_failures and not result.passed else PASS_MARK
        padding = ' ' * max(1, self.line_width - len(result.method))
        return (f"  {mark} {result.method} ({result.assertions} assertions)"
                f"{padding}{format_seconds(result.time)}s")

    def summarize(self, results: List[TestResult]) -> Dict[str, Any]:
        """
        Aggregate results into summary figures

        Returns:
            Dict[str, Any]: total, passed, failed, assertions and time
        """
        passed = sum(1 for result in results if result.passed)
        return {
            'total': len(results),
            'passed': passed,
            'failed': len(results) - passed,
            'assertions': sum(result.assertions for result in results),
            'time': sum(result.time for result in results),
        }

    def render_summary(self, summary: Dict[str, Any], results: List[TestResult]) -> None:
        self._line()
        self._line(SEPARATOR)
        self._line(f"Tests:    {summary['failed']} failed, {summary['passed']} passed "
                   f"({summary['assertions']} assertions)")
        self._line(f"Duration: {format_seconds(summary['time'])}s")
        self._line()

        for result in results:
            if not result.passed:
                self.render_failure(result)

    def render_failure(self, result: TestResult) -> None:
        """Write the detail block of one failed method."""
        if result.failure_message:
            message_lines = result.failure_message.splitlines()
        else:
            message_lines = DEFAULT_FAILURE_LINES

        self._line(SEPARATOR)
        self._line(f"FAILED  {result.suite} > {result.method}")
        self._line()
        for message_line in message_lines:
            self._line(message_line)
        self._line()
        self._line(f"at {result.suite}::{result.method}")
        self._line(f"Duration: {format_seconds(result.time)}s")

    def render_catalog(self, catalog: TestCatalog) -> None:
        """Write the catalog alone, for listing without execution."""
        self._line(f"Found {len(catalog)} test suite(s).")
        for suite, methods in catalog.items():
            self._line(suite)
            for method in methods:
                self._line(f"  - {method}")
        self.logger.debug(f"Listed {sum(len(m) for m in catalog.values())} test method(s)")

    @staticmethod
    def _group_by_suite(results: List[TestResult]):
        groups = []
        for result in results:
            if groups and groups[-1][0] == result.suite:
                groups[-1][1].append(result)
            else:
                groups.append((result.suite, [result]))
        return groups
