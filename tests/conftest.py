"""
Pytest configuration and shared fixtures for Hashtree tests.
"""

import hashlib
import os
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
from hypothesis import settings, Verbosity


def _leaf(value: bytes) -> bytes:
    return hashlib.sha256(b"\x00" + value).digest()


def _node(left: bytes, right: bytes) -> bytes:
    return hashlib.sha256(b"\x01" + left + right).digest()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def reference_leaf_hash() -> Callable[[bytes], bytes]:
    """Independent leaf hash computed straight from hashlib."""
    return _leaf


@pytest.fixture
def reference_node_hash() -> Callable[[bytes, bytes], bytes]:
    """Independent internal node hash computed straight from hashlib."""
    return _node


@pytest.fixture
def abcd_leaves():
    """The four-leaf scenario used throughout the tree tests."""
    return ["a", "b", "c", "d"]


@pytest.fixture
def write_config(temp_dir: Path):
    """
    Factory fixture that writes YAML content to a config file.

    Example:
        def test_something(write_config):
            path = write_config("logging:\\n  level: DEBUG\\n")
    """
    def _write(content: str, name: str = "config.yaml") -> Path:
        path = temp_dir / name
        path.write_text(content)
        return path

    return _write


# Register custom profiles for Hashtree property tests
settings.register_profile("hashtree", max_examples=100, verbosity=Verbosity.normal)
settings.register_profile("hashtree-ci", max_examples=1000, verbosity=Verbosity.verbose)
settings.register_profile("hashtree-dev", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "hashtree"))
