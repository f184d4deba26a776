"""Fixtures shared by the repository unit tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_session():
    """Create mock async session."""
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_result(mock_session):
    """Result object returned by every execute() call."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    mock_session.execute.return_value = result
    return result


@pytest.fixture
def executed_params(mock_session):
    """Bound parameters of the last statement passed to session.execute()."""

    def _params():
        stmt = mock_session.execute.call_args[0][0]
        return stmt.compile().params

    return _params
