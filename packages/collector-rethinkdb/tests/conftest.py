"""Shared fixtures for collector-rethinkdb tests."""

import pytest

from collector_protocols import InMemoryAccumulator

from fakes import FakeConnector


@pytest.fixture
def acc():
    """Fresh in-memory accumulator."""
    return InMemoryAccumulator()


@pytest.fixture
def connector():
    """Connector where every server is healthy."""
    return FakeConnector()
