"""Shared pytest fixtures for godotdoc tests."""

import pytest

from godotdoc import Settings, parse
from tests.helpers import source


@pytest.fixture
def settings():
    """Default settings: underscore members shown."""
    return Settings()


@pytest.fixture
def parse_gd():
    """Parse GDScript given as separate lines.

    Example:
        data = parse_gd("var x = 1", "func f():", "\\tpass")
        data = parse_gd("var _x", show_prefixed=False)
    """

    def _parse(*lines, show_prefixed=True, filename="test.gd"):
        return parse(filename, source(*lines), Settings(show_prefixed=show_prefixed))

    return _parse
