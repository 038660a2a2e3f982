"""Pytest configuration and fixtures."""

import pytest

from tuifade.ansi import ColourMode
from tuifade.colour import clear_cache
from tuifade.terminal import TerminalProfile


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "stress: stress tests with large inputs (skipped in CI)"
    )


@pytest.fixture
def term():
    """Deterministic terminal colours: white on black, truecolor output."""
    return {
        "term_bg": "#000000",
        "term_fg": "#ffffff",
        "colour_mode": ColourMode.TRUECOLOR,
    }


@pytest.fixture
def truecolor_profile():
    return TerminalProfile(colour_system="truecolor", background="#000000", foreground="#ffffff")


@pytest.fixture(autouse=True)
def fresh_cache():
    """Start every test with an empty global interpolation cache."""
    clear_cache()
    yield
    clear_cache()
