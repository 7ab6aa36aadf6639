import logging
from typing import Optional

from discovery.catalog_builder import TestCatalog


class CatalogFilter:
    """
    Narrows a catalog by a case-sensitive substring.

    A suite is kept when its identifier contains the substring or when any of
    its method names does. Kept suites keep their full method list, even if
    only one method matched; reports therefore show every method of a
    matching suite.
    """

    def __init__(self):
        self.logger = logging.getLogger('test_runner.catalog_filter')

    def apply(self, catalog: TestCatalog, substring: Optional[str]) -> TestCatalog:
        if not substring:
            return {suite: list(methods) for suite, methods in catalog.items()}

        filtered = {
            suite: list(methods)
            for suite, methods in catalog.items()
            if substring in suite or any(substring in method for method in methods)
        }

        self.logger.info(f"Filter '{substring}' kept {len(filtered)} of {len(catalog)} suite(s)")
        return filtered
