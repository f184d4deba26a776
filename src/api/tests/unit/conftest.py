"""Unit test fixtures shared across packages."""

import pytest

from infrastructure.settings import (
    get_database_settings,
    get_session_settings,
    get_settings,
    get_tenancy_settings,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reload settings per test so environment patches do not leak."""
    yield
    for accessor in (
        get_settings,
        get_database_settings,
        get_tenancy_settings,
        get_session_settings,
    ):
        accessor.cache_clear()
