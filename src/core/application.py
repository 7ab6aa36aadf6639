"""
Core Test Runner Application Logic.

One run is a linear pipeline: scan, build catalog, filter, collect results,
report.
"""

from typing import Any, Dict, List, Optional, TextIO
import time
import logging

from scanners.file_scanner import FileScanner
from discovery.namespace_resolver import NamespaceResolver
from discovery.method_extractor import MethodExtractor
from discovery.catalog_builder import TestCatalog, TestCatalogBuilder
from discovery.catalog_filter import CatalogFilter
from execution.result_sources import RecordedResultSource, ResultSource, StubResultSource
from execution.results import TestResult
from utils.config_manager import RunnerConfigManager
from utils.report_generator import ReportGenerator


class TestRunApplication:
    """
    This class implements the main application logic for the Dynamic Test Runner.
    """
    __test__ = False

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the application with its pipeline components.

        Args:
            config: Runner configuration; built-in defaults when omitted
        """
        self.config = config if config is not None else RunnerConfigManager().load_config()
        self.logger = logging.getLogger('test_runner')

        self.builder = TestCatalogBuilder(
            resolver=NamespaceResolver(self.config['namespace_prefix'], self.config['namespace_separator']),
            extractor=MethodExtractor(self.config['declaration_keyword']),
            scanner_factory=self._scan,
        )
        self.catalog_filter = CatalogFilter()

    def _scan(self, root_directory: str):
        return FileScanner(root_directory, self.config['exclude_patterns']).scan()

    def discover(self, root_directory: Optional[str] = None, filter_text: Optional[str] = None) -> TestCatalog:
        """
        Build the catalog for a directory and apply the name filter.

        Args:
            root_directory: Directory to scan, the configured root when omitted
            filter_text: Case-sensitive substring; empty or None keeps everything

        Returns:
            Filtered catalog

        Raises:
            DiscoveryError: If the directory cannot be scanned
        """
        root_directory = root_directory or self.config['root_directory']
        self.logger.info(f"Discovering tests in: {root_directory}")

        catalog = self.builder.build(root_directory)
        return self.catalog_filter.apply(catalog, filter_text)

    def create_result_source(self, results_file: Optional[str] = None) -> ResultSource:
        """Recorded results when a results file is configured, otherwise the placeholder stub."""
        results_file = results_file or self.config.get('results_file')
        if results_file:
            return RecordedResultSource.from_file(results_file)
        return StubResultSource()

    def run(self, root_directory: Optional[str] = None, filter_text: Optional[str] = None,
            result_source: Optional[ResultSource] = None, stream: Optional[TextIO] = None) -> Dict[str, Any]:
        """
        Run the whole pipeline and write the report.

        Discovery and result loading errors propagate before anything is
        printed.

        Returns:
            Dict containing the catalog, results and summary figures
        """
        start_time = time.time()

        catalog = self.discover(root_directory, filter_text)
        source = result_source or self.create_result_source()
        results: List[TestResult] = source.execute(catalog)

        reporter = ReportGenerator(stream, self.config['line_width'], self.config['mark_failures'])
        summary = reporter.render(catalog, results)

        self.logger.info(f"Reported {summary['total']} test(s) from {len(catalog)} suite(s) "
                         f"in {time.time() - start_time:.2f}s")

        return {
            'catalog': catalog,
            'results': results,
            'summary': summary,
        }

    def list_tests(self, root_directory: Optional[str] = None, filter_text: Optional[str] = None,
                   stream: Optional[TextIO] = None) -> TestCatalog:
        """Discover and print the catalog without collecting results."""
        catalog = self.discover(root_directory, filter_text)
        ReportGenerator(stream, self.config['line_width'], self.config['mark_failures']).render_catalog(catalog)
        return catalog
