"""Settings for mockspace.

Uses pydantic-settings so behavior can be tuned per project through
``MOCKSPACE_*`` environment variables or a ``.env`` file, e.g.::

    MOCKSPACE_REPORT_FORMAT=table
    MOCKSPACE_CAPTURE_ORIGIN=false
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ReportFormat = Literal["plain", "table"]


class MockspaceSettings(BaseSettings):
    """mockspace settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="MOCKSPACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Record where each expectation was declared (file:line)
    capture_origin: bool = True

    # Verify report layout
    report_format: ReportFormat = "plain"
    report_width: int = Field(default=100, ge=40)

    # Whether the pytest fixture verifies the space after the test body
    autoverify: bool = True


@lru_cache(maxsize=1)
def get_settings() -> MockspaceSettings:
    """Get the cached settings instance."""
    return MockspaceSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache. Useful for testing."""
    get_settings.cache_clear()
