"""
Unit tests for catalog building over scanner output.
"""

import pytest

from discovery.catalog_builder import TestCatalogBuilder
from discovery.namespace_resolver import NamespaceResolver
from handlers.error_handler import DiscoveryError
from scanners.file_scanner import TestFile


def fake_scanner(files):
    """Scanner factory returning fixed TestFile records."""
    return lambda root: iter([TestFile(path, content) for path, content in files])


class TestCatalogBuilding:

    def test_files_without_methods_are_omitted(self):
        builder = TestCatalogBuilder(scanner_factory=fake_scanner([
            ("UserTest.php", "function testCreate"),
            ("Helpers.php", "function helper"),
            ("Readme.md", ""),
        ]))

        catalog = builder.build("unused")

        assert catalog == {"Tests.Feature.UserTest": ["testCreate"]}

    def test_catalog_follows_scanner_order(self):
        builder = TestCatalogBuilder(scanner_factory=fake_scanner([
            ("B/SecondTest.php", "function testB"),
            ("A/FirstTest.php", "function testA"),
        ]))

        assert list(builder.build("unused")) == ["Tests.Feature.B.SecondTest", "Tests.Feature.A.FirstTest"]

    def test_colliding_identifiers_last_write_wins(self):
        builder = TestCatalogBuilder(scanner_factory=fake_scanner([
            ("Foo/BarTest.php", "function testOld"),
            ("Other.php", "function testOther"),
            ("Foo\\BarTest.php", "function testNew"),
        ]))

        catalog = builder.build("unused")

        assert catalog["Tests.Feature.Foo.BarTest"] == ["testNew"]
        assert len(catalog) == 2

    def test_build_reads_real_directory(self, feature_tree):
        builder = TestCatalogBuilder(resolver=NamespaceResolver(prefix="Tests"))

        catalog = builder.build(str(feature_tree))

        assert catalog == {"Tests.Feature.UserTest": ["testCreate", "testDelete"]}

    def test_each_build_is_fresh(self, make_tree):
        root = make_tree({"OneTest.php": "function testOne"})
        builder = TestCatalogBuilder()

        first = builder.build(str(root))
        (root / "OneTest.php").write_text("function testChanged", encoding='utf-8')
        second = builder.build(str(root))

        assert first == {"Tests.Feature.OneTest": ["testOne"]}
        assert second == {"Tests.Feature.OneTest": ["testChanged"]}

    def test_missing_root_propagates(self, tmp_path):
        builder = TestCatalogBuilder()

        with pytest.raises(DiscoveryError):
            builder.build(str(tmp_path / "missing"))
