"""Pytest configuration and fixtures for microtpl tests."""

import pytest

from microtpl import Environment, LexerConfig


@pytest.fixture
def env():
    """Create a basic microtpl Environment."""
    return Environment()


@pytest.fixture
def env_globals():
    """Create an Environment with globals shared by every template."""
    return Environment(globals={"site": "example.org", "version": 3})


@pytest.fixture
def env_brackets():
    """Create an Environment using ``[[ ... ]]`` directive markers."""
    return Environment(lexer_config=LexerConfig(open_marker="[[", close_marker="]]"))


def assert_template_equal(template_result: str, expected: str) -> None:
    """Assert template result equals expected, normalizing whitespace.

    Args:
        template_result: The actual template rendering result.
        expected: The expected output.
    """
    # Normalize whitespace for comparison
    actual_normalized = " ".join(template_result.split())
    expected_normalized = " ".join(expected.split())
    assert actual_normalized == expected_normalized, (
        f"Template output mismatch:\n"
        f"  Actual: {actual_normalized!r}\n"
        f"  Expected: {expected_normalized!r}"
    )
