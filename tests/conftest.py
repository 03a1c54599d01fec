"""Shared fixtures for the Bantam front-end tests."""

import io
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bantam import ErrorHandler, Scanner, Parser


def scan_source(source):
    """Scan a source string; returns (tokens up to and including EOF, error handler)."""
    handler = ErrorHandler()
    tokens = Scanner(io.StringIO(source), handler).tokenize()
    return tokens, handler


def parse_text(source, handler=None):
    return Parser(handler).parse(io.StringIO(source))


@pytest.fixture
def write_source(tmp_path):
    """Write a Bantam source file under tmp_path and return its path as a string."""
    def write(text, name="Main.btm"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return write
