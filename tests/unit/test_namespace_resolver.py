# tests/unit/test_namespace_resolver.py
import unittest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from discovery.namespace_resolver import NamespaceResolver


class TestNamespaceResolver(unittest.TestCase):

    def setUp(self):
        self.resolver = NamespaceResolver()

    def test_nested_path_joins_segments_under_prefix(self):
        self.assertEqual(self.resolver.resolve("Foo/BarTest.php"), "Tests.Feature.Foo.BarTest")

    def test_backslash_separators_are_normalized(self):
        self.assertEqual(self.resolver.resolve("Foo\\BarTest.php"), "Tests.Feature.Foo.BarTest")
        self.assertEqual(self.resolver.resolve("Foo\\Sub/BarTest.php"), "Tests.Feature.Foo.Sub.BarTest")

    def test_path_without_separator(self):
        self.assertEqual(self.resolver.resolve("BarTest.php"), "Tests.Feature.BarTest")

    def test_resolution_is_deterministic(self):
        path = "Api/V2/OrderTest.x"
        self.assertEqual(self.resolver.resolve(path), self.resolver.resolve(path))

    def test_only_the_final_extension_is_stripped(self):
        self.assertEqual(self.resolver.resolve("v1.2/Bar.Test.php"), "Tests.Feature.v1.2.Bar.Test")
        self.assertEqual(self.resolver.resolve("Foo/BarTest"), "Tests.Feature.Foo.BarTest")

    def test_custom_prefix_and_separator(self):
        resolver = NamespaceResolver(prefix="Tests\\Feature", separator="\\")
        self.assertEqual(resolver.resolve("Foo/BarTest.php"), "Tests\\Feature\\Foo\\BarTest")

    def test_repeated_separators_collapse(self):
        self.assertEqual(self.resolver.resolve("Foo//BarTest.php"), "Tests.Feature.Foo.BarTest")


if __name__ == "__main__":
    unittest.main()
