import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

#: Version whose uint32 encoding is 01011101 00110011 10110010 01000100
BIG_VERSION = 1563669060


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


@pytest.fixture()
def make_store():
    """Provide a factory for stores with the five-byte header used in tests."""
    from binstore import PackedArrayStore

    def _make(width, values=(), version=BIG_VERSION, header_size=5):
        return PackedArrayStore(version, header_size, width, values)

    return _make


@pytest.fixture()
def big_version():
    return BIG_VERSION
