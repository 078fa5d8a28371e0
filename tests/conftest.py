"""Shared fixtures."""

import logging

import pytest

from lib.amino.logging import setup_logging
from lib.amino.session import Session
from tests.fake_device import FakeAminoTransport, FakeClock


@pytest.fixture(autouse=True)
def fresh_logging() -> None:
    """Rebind log handlers to the current stdout for every test."""
    setup_logging(level=logging.DEBUG)


@pytest.fixture
def transport() -> FakeAminoTransport:
    """Create fake AMINET transport fixture."""
    return FakeAminoTransport()


@pytest.fixture
def clock() -> FakeClock:
    """Create hand-driven clock fixture."""
    return FakeClock()


@pytest.fixture
def session(transport: FakeAminoTransport, clock: FakeClock) -> Session:
    """Create connected session fixture."""
    session = Session(
        host="10.231.64.92",
        username="root",
        password="root2root",
        transport=transport,
        clock=clock,
    )
    session.connect()
    yield session
    session.disconnect()
