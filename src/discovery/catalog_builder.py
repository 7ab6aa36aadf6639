import logging
from typing import Callable, Dict, Iterable, List, Optional

from scanners.file_scanner import FileScanner, TestFile
from discovery.namespace_resolver import NamespaceResolver
from discovery.method_extractor import MethodExtractor

# Suite identifier -> ordered test method names
TestCatalog = Dict[str, List[str]]


class TestCatalogBuilder:
    """
    Builds the suite catalog for a directory tree.

    Every file yielded by the scanner is resolved to a suite identifier and
    searched for test methods. Files without methods are left out; when two
    files resolve to the same identifier the later one replaces the earlier.
    """
    __test__ = False

    def __init__(self, resolver: Optional[NamespaceResolver] = None,
                 extractor: Optional[MethodExtractor] = None,
                 scanner_factory: Optional[Callable[[str], Iterable[TestFile]]] = None):
        """
        Args:
            resolver: Path to suite identifier mapping
            extractor: Test method finder
            scanner_factory: Callable taking the root directory and returning an
                iterable of TestFile; defaults to a FileScanner scan
        """
        self.resolver = resolver or NamespaceResolver()
        self.extractor = extractor or MethodExtractor()
        self.scanner_factory = scanner_factory or (lambda root: FileScanner(root).scan())
        self.logger = logging.getLogger('test_runner.catalog_builder')

    def build(self, root_directory: str) -> TestCatalog:
        """
        Build a fresh catalog from the files under root_directory.

        Raises:
            DiscoveryError: Propagated from the scanner
        """
        catalog = {}

        for test_file in self.scanner_factory(root_directory):
            suite = self.resolver.resolve(test_file.relative_path)
            methods = self.extractor.extract(test_file.content)

            if not methods:
                self.logger.debug(f"No test methods in {test_file.relative_path}")
                continue

            if suite in catalog:
                self.logger.warning(f"Suite {suite} redefined by {test_file.relative_path}; keeping the later file")

            catalog[suite] = methods
            self.logger.debug(f"Discovered {len(methods)} test(s) in {suite}")

        self.logger.info(f"Discovered {len(catalog)} test suite(s) under {root_directory}")
        return catalog
