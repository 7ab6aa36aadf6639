import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, List, Optional
import fnmatch
import os

from handlers.error_handler import DiscoveryError


@dataclass(frozen=True)
class TestFile:
    """A file found under the scan root, with its decoded content."""
    __test__ = False

    relative_path: str
    content: str


class FileScanner:
    """
    Recursive file scanner yielding every file below a root directory together with its content
    """

    # Hidden files and directories are skipped, like a default finder
    IGNORE_PATTERNS = [
        '.*',
    ]

    CONTENT_ENCODINGS = ['utf-8', 'latin-1']

    def __init__(self, root_directory: str, exclude_patterns: Optional[List[str]] = None):
        """
        Initialize file scanner

        Args:
            root_directory (str): Root directory to scan
            exclude_patterns (List[str], optional): Additional name patterns to skip

        Raises:
            DiscoveryError: If the root directory is missing or unreadable
        """
        self.root_directory = Path(root_directory).resolve()
        self.exclude_patterns = self.IGNORE_PATTERNS + list(exclude_patterns or [])
        self.logger = logging.getLogger('test_runner.file_scanner')

        self._validate_root_directory()

        self.scan_stats = {}
        self._reset_stats()

    def _validate_root_directory(self):
        """Validate the root directory"""
        if not self.root_directory.exists():
            raise DiscoveryError(f"Directory does not exist: {self.root_directory}")

        if not self.root_directory.is_dir():
            raise DiscoveryError(f"Path is not a directory: {self.root_directory}")

        if not os.access(self.root_directory, os.R_OK):
            raise DiscoveryError(f"Cannot read directory: {self.root_directory}")

    def scan(self) -> Generator[TestFile, None, None]:
        """
        Yield every file below the root, in sorted relative-path order

        Yields:
            TestFile: Relative path (forward slashes) and decoded content

        Raises:
            DiscoveryError: If the tree cannot be listed or a file cannot be read
        """
        self.logger.info(f"Scanning for test files in: {self.root_directory}")
        self._reset_stats()

        for file_path in self._list_files():
            relative_path = file_path.relative_to(self.root_directory).as_posix()
            self.scan_stats['files_found'] += 1
            yield TestFile(relative_path, self._read_content(file_path))

        self.logger.info(f"Scan completed: {self.scan_stats['files_found']} files, "
                         f"{self.scan_stats['files_ignored']} ignored, "
                         f"{self.scan_stats['binary_files']} binary")

    def _list_files(self) -> List[Path]:
        """
        List all files under the root, skipping ignored names at any depth

        Returns:
            List[Path]: Files sorted by path
        """
        try:
            candidates = sorted(self.root_directory.glob("**/*"))
        except OSError as e:
            raise DiscoveryError(f"Error scanning directory {self.root_directory}: {e}") from e

        files = []
        for path in candidates:
            relative_parts = path.relative_to(self.root_directory).parts
            if any(self._should_ignore(part) for part in relative_parts):
                if path.is_file():
                    self.scan_stats['files_ignored'] += 1
                continue

            if path.is_file():
                files.append(path)
            elif path.is_dir():
                self.scan_stats['directories_scanned'] += 1

        return files

    def _should_ignore(self, name: str) -> bool:
        """
        Check if a file or directory name matches an exclude pattern

        Args:
            name (str): Single path component

        Returns:
            bool: True if the entry should be skipped
        """
        for pattern in self.exclude_patterns:
            if fnmatch.fnmatch(name, pattern):
                return True

        return False

    def _read_content(self, file_path: Path) -> str:
        """
        Read a file fully and decode it

        Binary content (containing NUL bytes) decodes to an empty string so that it contributes no tests.
        """
        try:
            raw = file_path.read_bytes()
        except OSError as e:
            raise DiscoveryError(f"Cannot read file {file_path}: {e}") from e

        if b'\x00' in raw:
            self.scan_stats['binary_files'] += 1
            self.logger.debug(f"Skipping binary content: {file_path.name}")
            return ''

        for encoding in self.CONTENT_ENCODINGS:
            try:
                return raw.decode(encoding)
            except UnicodeDecodeError:
                continue

        return ''

    def _reset_stats(self):
        """Reset scan statistics"""
        self.scan_stats = {
            'directories_scanned': 0,
            'files_found': 0,
            'files_ignored': 0,
            'binary_files': 0
        }
