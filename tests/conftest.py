"""Shared pytest fixtures for mockspace tests.

Every test runs against its own active Space so doubles never leak
between tests.
"""

import pytest

from mockspace.config import clear_settings_cache
from mockspace.pytest_plugin import mock_space  # noqa: F401
from mockspace.space import Space, use_space


@pytest.fixture(autouse=True)
def isolated_space() -> Space:
    """Fixture that activates a fresh Space and resets it after the test.

    Yields:
        Space active for the duration of the test
    """
    space = Space()
    with use_space(space):
        yield space
    space.reset_all()


@pytest.fixture
def clean_settings() -> None:
    """Fixture that clears cached settings before and after the test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
