"""Pytest fixtures for exporter tests."""

from unittest.mock import MagicMock, patch

import pytest

from fakes import FakeResult
from neo4j_exporter.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Keep cached settings from leaking between tests."""
    monkeypatch.delenv("EXPORTER_TEMP_ID", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_al():
    """Mock access layer for utility tests."""
    al = MagicMock()
    al.temp_id_property = "_tempID"
    al.execute_query.return_value = FakeResult()
    return al


@pytest.fixture
def mock_neo4j():
    """Mock Neo4j driver for connection tests."""
    with patch("neo4j_exporter.access.GraphDatabase") as mock_db:
        mock_driver = MagicMock()
        mock_session = MagicMock()
        mock_tx = MagicMock()

        mock_driver.session.return_value.__enter__ = MagicMock(return_value=mock_session)
        mock_driver.session.return_value.__exit__ = MagicMock(return_value=False)
        mock_session.begin_transaction.return_value = mock_tx
        mock_db.driver.return_value = mock_driver

        yield {
            "db": mock_db,
            "driver": mock_driver,
            "session": mock_session,
            "tx": mock_tx,
        }
