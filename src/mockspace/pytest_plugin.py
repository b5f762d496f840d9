"""pytest integration.

Load it from a conftest::

    from mockspace.pytest_plugin import mock_space  # noqa: F401

Tests requesting ``mock_space`` get a fresh active Space that is verified
after the test body and always reset afterwards.
"""

from collections.abc import Iterator

import pytest

from mockspace.config import get_settings
from mockspace.space import Space, use_space


@pytest.fixture
def mock_space() -> Iterator[Space]:
    """Fixture that installs a fresh Space and tears it down after the test.

    Yields:
        The Space every double created during the test registers with
    """
    space = Space()
    with use_space(space):
        try:
            yield space
            if get_settings().autoverify:
                space.verify_all()
        finally:
            space.reset_all()
