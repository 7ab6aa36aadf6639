"""
Test discovery for the Dynamic Test Runner.

Maps test files to suite identifiers, extracts their test methods and
filters the resulting catalog.
"""

from .namespace_resolver import NamespaceResolver
from .method_extractor import MethodExtractor
from .catalog_builder import TestCatalog, TestCatalogBuilder
from .catalog_filter import CatalogFilter

__all__ = [
    "NamespaceResolver",
    "MethodExtractor",
    "TestCatalog",
    "TestCatalogBuilder",
    "CatalogFilter"
]
