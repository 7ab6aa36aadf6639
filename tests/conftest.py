"""
Pytest configuration and shared fixtures for all tests.
"""

import pytest
import sys
from pathlib import Path
from typing import Callable, Dict, Generator, Union
import logging

# Add src directory and project root to Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from handlers.logging_handler import LoggingHandler, detach_handlers


@pytest.fixture(autouse=True)
def reset_runner_logging() -> Generator[None, None, None]:
    """Detach handlers bound to streams captured by a previous test."""
    yield
    detach_handlers(logging.getLogger(LoggingHandler.LOGGER_NAME))


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Dict[str, Union[str, bytes]]], Path]:
    """Factory writing {relative path: content} into a fresh directory."""
    def _make_tree(files: Dict[str, Union[str, bytes]]) -> Path:
        root = tmp_path / "suite_root"
        root.mkdir(exist_ok=True)
        for relative_path, content in files.items():
            file_path = root / relative_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                file_path.write_bytes(content)
            else:
                file_path.write_text(content, encoding='utf-8')
        return root

    return _make_tree


@pytest.fixture
def feature_tree(make_tree) -> Path:
    """A tests directory with one feature suite and one file without tests."""
    return make_tree({
        "Feature/UserTest.php": (
            "<?php\n"
            "class UserTest extends TestCase\n"
            "{\n"
            "    public function testCreate() { $this->assertTrue(true); }\n"
            "    public function testDelete() { $this->assertTrue(true); }\n"
            "}\n"
        ),
        "Feature/Empty.php": "<?php\nclass Empty {}\n",
    })


@pytest.fixture
def results_file(tmp_path: Path) -> Path:
    """Recorded results for the feature tree, one of them failed."""
    path = tmp_path / "results.yaml"
    path.write_text(
        "results:\n"
        "  - suite: Tests.Feature.UserTest\n"
        "    method: testCreate\n"
        "    assertions: 3\n"
        "    time: 0.05\n"
        "    status: pass\n"
        "  - suite: Tests.Feature.UserTest\n"
        "    test: testDelete\n"
        "    assertions: 1\n"
        "    time: 0.1\n"
        "    status: FAIL\n",
        encoding='utf-8'
    )
    return path


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
