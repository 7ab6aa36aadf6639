import posixpath
import re


class NamespaceResolver:
    """
    Maps a file path relative to the scan root onto a suite identifier.

    ``Foo/BarTest.php`` under prefix ``Tests.Feature`` becomes
    ``Tests.Feature.Foo.BarTest``. Forward and back slashes are both treated
    as path separators.
    """

    PATH_SEPARATORS = re.compile(r'[\\/]+')

    def __init__(self, prefix: str = 'Tests.Feature', separator: str = '.'):
        self.prefix = prefix
        self.separator = separator

    def resolve(self, relative_path: str) -> str:
        segments = [segment for segment in self.PATH_SEPARATORS.split(relative_path) if segment]
        if segments:
            segments[-1] = posixpath.splitext(segments[-1])[0]

        return self.separator.join([self.prefix] + segments)
